import pytest

from rustlings.exercises.messages import ChangeColor, Echo, Move, Point, Quit, State


def test_match_message_call(capsys):
    state = State(color=(0, 0, 0), position=Point(0, 0), should_quit=False)
    state.process(ChangeColor(255, 0, 255))
    state.process(Echo("hello world"))
    state.process(Move(Point(x=10, y=15)))
    state.process(Quit())

    assert state.color == (255, 0, 255)
    assert state.position.x == 10
    assert state.position.y == 15
    assert state.should_quit is True
    assert capsys.readouterr().out == "hello world\n"


def test_change_color_out_of_range_is_refused():
    state = State()
    with pytest.raises(ValueError):
        state.process(ChangeColor(256, 0, 0))
    assert state.color == (0, 0, 0)


def test_point_components_are_bytes():
    with pytest.raises(ValueError):
        Point(-1, 0)


def test_unknown_message_is_refused():
    with pytest.raises(TypeError):
        State().process("jump")