"""Step definitions for difficulty scoring tests."""

from behave import given, when, then
from zh_reader.difficulty import DifficultyAnalyzer
from zh_reader.frequency import load_frequency_table


@given("the packaged frequency table is loaded")
def step_packaged_table(context):
    """Load the table shipped with the package."""
    context.analyzer = DifficultyAnalyzer(load_frequency_table())


@given("the frequency table could not be loaded")
def step_missing_table(context):
    """Point the loader at a file that does not exist."""
    table = load_frequency_table("no_such_dir/hanzi_ranks.csv")
    assert len(table) == 0
    context.analyzer = DifficultyAnalyzer(table)


@when('I analyze the text "{text}"')
def step_analyze_text(context, text):
    context.report = context.analyzer.analyze(text)


@then("the difficulty level should be {level:d}")
def step_check_level(context, level):
    actual = context.report.difficulty_level
    assert actual == level, f"Expected level {level}, got {actual} ({context.report.level_distribution})"


@then("the difficulty score should be {score:d}")
def step_check_score(context, score):
    assert context.report.difficulty_score == score, f"Expected score {score}, got {context.report.difficulty_score}"


@then('the label should be "{label}"')
def step_check_label(context, label):
    assert context.report.label == label


@then("the text should have {total:d} characters, {unique:d} unique")
def step_check_counts(context, total, unique):
    assert context.report.total_characters == total, f"Expected {total}, got {context.report.total_characters}"
    assert context.report.unique_characters == unique, f"Expected {unique}, got {context.report.unique_characters}"


@then("at least {count:d} unique characters should be in {level}")
def step_check_level_count(context, count, level):
    actual = context.report.character_levels[level]
    assert actual >= count, f"Expected at least {count} characters in {level}, got {actual}"
