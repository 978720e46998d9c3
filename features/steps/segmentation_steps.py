"""Step definitions for pinyin annotation tests."""

from behave import given, when, then
from zh_reader.segmenter import Resolution, SentenceSegmenter
from zh_reader.transliteration import PypinyinTransliterator


class DroppingTransliterator(PypinyinTransliterator):
    """pypinyin backend whose sentence output loses its last syllable."""

    def transliterate(self, text):
        return super().transliterate(text)[:-1]


@given("the default sentence segmenter is available")
def step_default_segmenter(context):
    """Create a segmenter backed by pypinyin."""
    context.segmenter = SentenceSegmenter()


@given("a pinyin backend that drops characters from sentences")
def step_dropping_backend(context):
    """Replace the segmenter with one whose sentence lookups never line up."""
    context.segmenter = SentenceSegmenter(DroppingTransliterator())


@when('I split the text "{text}"')
def step_split_text(context, text):
    context.sentences = context.segmenter.sentence_split(text)


@when('I annotate the text "{text}"')
def step_annotate_text(context, text):
    context.input_text = text
    context.results = context.segmenter.segment(text)
    context.tokens = [token for result in context.results for token in result.tokens]


@then("I should get {count:d} sentences")
def step_check_sentence_count(context, count):
    assert len(context.sentences) == count, f"Expected {count} sentences, got {context.sentences}"


@then('sentence {index:d} should be "{sentence}"')
def step_check_sentence(context, index, sentence):
    actual = context.sentences[index - 1]
    assert actual == sentence, f"Expected '{sentence}', got '{actual}'"


@then("I should get one token per character of the text")
def step_check_alignment(context):
    assert [token.characters for token in context.tokens] == list(context.input_text)


@then('character {index:d} should be "{char}" with pinyin "{reading}"')
def step_check_pinyin(context, index, char, reading):
    token = context.tokens[index - 1]
    assert token.characters == char, f"Expected '{char}', got '{token.characters}'"
    assert token.pinyin == (reading,), f"Expected {reading} for {char}, got {token.pinyin}"


@then('character {index:d} should be "{char}" with no pinyin')
def step_check_no_pinyin(context, index, char):
    token = context.tokens[index - 1]
    assert token.characters == char
    assert token.pinyin == ("",), f"Expected empty pinyin for {char}, got {token.pinyin}"


@then("every sentence should be resolved by fallback")
def step_check_fallback(context):
    for result in context.results:
        assert result.resolution is Resolution.FALLBACK, f"'{result.sentence}' resolved by {result.resolution}"
