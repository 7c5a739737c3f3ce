def test_ask_accepts_number_label_or_y(make_prompter):
    prompter, printed = make_prompter("2", "yes", "Y", "maybe")
    assert prompter.ask("Continue?", "Yes", "No") == "No"
    assert prompter.ask("Continue?", "Yes", "No") == "Yes"
    assert prompter.ask("Continue?", "Yes", "No") == "Yes"
    assert prompter.ask("Continue?", "Yes", "No") is None
    assert printed == ["Continue?"] * 4


def test_ask_end_of_input_dismisses(make_prompter):
    prompter, _ = make_prompter()
    assert prompter.ask("Continue?", "Yes, Cleanup", "Cancel", warning=True) is None


def test_assume_yes_picks_first_choice(make_prompter):
    prompter, printed = make_prompter(assume_yes=True)
    assert prompter.ask("Really?", "Yes, Cleanup", "Cancel", warning=True) == "Yes, Cleanup"
    assert printed == ["Warning: Really?", "[Yes, Cleanup]"]


def test_pick(make_prompter):
    prompter, printed = make_prompter("3", "0")
    items = ["a", "b", "c"]
    assert prompter.pick(items, label=str.upper, placeholder="Choose an action:") == "c"
    assert printed == ["Choose an action:", "  1) A", "  2) B", "  3) C"]
    assert prompter.pick(items, label=str.upper, placeholder="Choose an action:") is None
