import pytest

from dotfiles_bootstrap.lib.prompt import ask


@pytest.mark.parametrize("reply", ["y", "Y", "yes", "YES", " Yes \n"])
def test_yes_answers(scripted_input, reply):
    assert ask("Install?", "no", input_fn=scripted_input([reply])) is True


@pytest.mark.parametrize("reply", ["n", "N", "no", "No"])
def test_no_answers(scripted_input, reply):
    assert ask("Install?", "yes", input_fn=scripted_input([reply])) is False


def test_empty_uses_default_yes(scripted_input):
    input_fn = scripted_input([""])

    assert ask("Do you want to install Homebrew?", "yes", input_fn=input_fn) is True
    assert input_fn.prompts == ["Do you want to install Homebrew? (y/n): [y] "]


def test_empty_uses_default_no(scripted_input):
    assert ask("Install?", "no", input_fn=scripted_input([""])) is False


def test_empty_without_default_reprompts(scripted_input):
    errors = []
    input_fn = scripted_input(["", "", "y"])

    assert ask("Install?", None, input_fn=input_fn, echo_err=errors.append) is True
    assert input_fn.prompts == ["Install? (y/n): [] "] * 3
    assert errors == ["Invalid input; enter 'y' or 'n'."] * 2


def test_unrecognized_answers_reprompt(scripted_input):
    errors = []
    input_fn = scripted_input(["yep", "nope", "maybe", "n"])

    assert ask("Install?", "yes", input_fn=input_fn, echo_err=errors.append) is False
    assert len(input_fn.prompts) == 4
    assert len(errors) == 3


def test_many_invalid_answers_do_not_grow_the_stack(scripted_input):
    input_fn = scripted_input(["?"] * 5000 + ["yes"])

    assert ask("Install?", None, input_fn=input_fn, echo_err=lambda _m: None) is True


def test_rejects_unknown_default():
    with pytest.raises(ValueError):
        ask("Install?", "maybe", input_fn=lambda _p: "y")
