from itertools import combinations

from codelens.constants import DEFAULT_SUGGESTIONS, HEURISTIC_KEYWORD_WEIGHTS
from codelens.parsing import (
    clean_bullet_point,
    extract_score,
    extract_suggestions,
    heuristic_score,
    parse_bullet_points,
    score_from_marker,
)

# --- Score extraction ---

def test_marker_score_wins_over_keywords():
    text = "Found an SQL injection and weak validation.\nCODE QUALITY SCORE: 9\nsecurity security"
    assert score_from_marker(text) == 9
    assert extract_score(text) == 9

def test_marker_score_tolerates_markdown_bold():
    assert extract_score("## CODE QUALITY SCORE: **8**/10") == 8

def test_marker_score_is_not_clamped():
    assert extract_score("CODE QUALITY SCORE: 85") == 85

def test_missing_marker_uses_heuristic():
    text = "The query is open to SQL Injection."
    assert score_from_marker(text) is None
    # Heuristic: baseline 7, minus 2 for SQL injection.
    assert extract_score(text) == 5
    assert heuristic_score(text) <= 5

def test_heuristic_without_keywords_is_baseline():
    assert heuristic_score("Looks fine to me.") == 7

def test_heuristic_keywords_stack():
    text = "mass assignment risk, missing validation, a security review is needed"
    assert heuristic_score(text) == 4

def test_heuristic_rewards_framework_usage():
    assert heuristic_score("Good use of Eloquent scopes and middleware.") == 9

def test_heuristic_always_in_range():
    keywords = list(HEURISTIC_KEYWORD_WEIGHTS)
    for size in range(len(keywords) + 1):
        for combo in combinations(keywords, size):
            score = heuristic_score(" ".join(combo))
            assert 1 <= score <= 10

# --- Suggestion extraction ---

def test_two_dash_bullets():
    text = "SUGGESTIONS:\n- Use f-strings\n- Split the function\n"
    assert extract_suggestions(text) == ["Use f-strings", "Split the function"]

def test_suggestions_then_best_practices():
    text = (
        "BEST PRACTICES:\n* Keep functions small\n\n"
        "SUGGESTIONS:\n- Cache the result\n\n"
        "ISSUES FOUND:\n- Off-by-one in loop\n"
    )
    assert extract_suggestions(text) == ["Cache the result", "Keep functions small"]

def test_issues_and_security_sections_are_not_suggestions():
    text = (
        "SUGGESTIONS:\n- Rename variables\n"
        "SECURITY CONCERNS:\n- Hardcoded secret\n"
        "ISSUES FOUND:\n- Unused import\n"
    )
    assert extract_suggestions(text) == ["Rename variables"]

def test_no_markers_returns_fallback():
    result = extract_suggestions("The code is okay, nothing structured here.")
    assert result == DEFAULT_SUGGESTIONS
    assert len(result) > 0

def test_fallback_is_a_copy():
    result = extract_suggestions("")
    result.append("mutated")
    assert "mutated" not in DEFAULT_SUGGESTIONS

def test_sections_without_bullets_return_fallback():
    assert extract_suggestions("SUGGESTIONS:\nnone really\nBEST PRACTICES:\n") == DEFAULT_SUGGESTIONS

def test_heading_of_next_section_is_not_kept():
    text = "## SUGGESTIONS:\n- Add docstrings\n\n## ISSUES FOUND:\n- None\n"
    assert extract_suggestions(text) == ["Add docstrings"]

def test_bold_heading_of_next_section_is_not_kept():
    text = "**SUGGESTIONS:**\n- Add docstrings\n\n**BEST PRACTICES:**\n- Pin dependencies\n"
    assert extract_suggestions(text) == ["Add docstrings", "Pin dependencies"]

# --- Bullet parsing ---

def test_bold_labels_are_flattened():
    assert clean_bullet_point("* **Naming**: use snake_case") == "Naming: use snake_case"
    assert clean_bullet_point("- **Naming** use snake_case") == "Naming: use snake_case"
    assert clean_bullet_point("*   plain star") == "plain star"

def test_continuation_lines_join_the_point():
    text = "- First line\n  continues here\n- Second"
    assert parse_bullet_points(text) == ["First line\ncontinues here", "Second"]

def test_blank_lines_outside_code_block_are_dropped():
    # Blank lines only survive inside fenced code blocks.
    text = "- First line\n\n\n  continued after a gap\n"
    assert parse_bullet_points(text) == ["First line\ncontinued after a gap"]

def test_code_block_keeps_blank_lines_and_indentation():
    text = (
        "\n- Use a context manager:\n"
        "```python\n"
        "with open(path) as f:\n"
        "\n"
        "    data = f.read()\n"
        "- not a bullet\n"
        "```\n"
        "- Close resources\n"
    )
    assert parse_bullet_points(text) == [
        "Use a context manager:\n```python\nwith open(path) as f:\n\n    data = f.read()\n- not a bullet\n```",
        "Close resources",
    ]

def test_empty_points_are_discarded():
    assert parse_bullet_points("- \n-   \n- real point") == ["real point"]

def test_text_before_first_bullet_is_ignored():
    assert parse_bullet_points("intro text\n- only point") == ["only point"]

def test_unterminated_code_block_ends_at_next_bullet():
    # Replies cut off by the token limit can leave a fence open.
    text = "- Example:\n```\nprint('x')\n- Split the function\n* Add tests"
    assert parse_bullet_points(text) == ["Example:\n```\nprint('x')", "Split the function", "Add tests"]

def test_inline_fences_do_not_open_a_block():
    text = "SUGGESTIONS:\n- Use ```f-strings``` for formatting\n- Split the function\n- Add tests\n"
    assert extract_suggestions(text) == [
        "Use ```f-strings``` for formatting",
        "Split the function",
        "Add tests",
    ]

def test_bullet_can_open_a_code_block():
    text = "- Use this pattern: ```python\n    x = 1\n```\n- Next point"
    assert parse_bullet_points(text) == ["Use this pattern: ```python\n    x = 1\n```", "Next point"]

def test_numbered_heading_of_next_section_is_not_kept():
    text = "### 2. SUGGESTIONS:\n- Add docstrings\n- Pin dependencies\n\n### 3. BEST PRACTICES:\n- Keep functions small\n"
    assert extract_suggestions(text) == ["Add docstrings", "Pin dependencies", "Keep functions small"]
