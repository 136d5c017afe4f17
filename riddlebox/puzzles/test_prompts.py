from riddlebox.puzzles.prompts import build_prompt, settings_for


def test_generation_settings_per_content_type():
    assert settings_for("riddle", "riddle").temperature == 0.9
    assert settings_for("endurance", "riddle").max_output_length == 150
    assert settings_for("logic", "logic").temperature == 0.8


def test_riddle_prompt_lists_recent_questions():
    long_question = "What has keys but can't open locks and also " + "y" * 100
    prompt = build_prompt("riddle", "riddle", "a household item", [long_question])
    assert "Avoid these recent puzzles:" in prompt
    assert f"- {long_question[:60]}\n" in prompt
    assert "a household item" in prompt
    assert "RIDDLE:" in prompt


def test_logic_prompt_numbers_the_page():
    prompt = build_prompt("logic", "logic", "family relationships", page=4)
    assert "#4" in prompt
    assert "OPTIONS:" in prompt
    assert "Avoid" not in prompt


def test_endurance_prompt_is_marked():
    assert "endurance" in build_prompt("endurance", "logic", "family relationships")
