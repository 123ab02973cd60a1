"""Ready-made sample programs, in both step and native form."""

from typing import Iterator

from .steps import Action, Emit, Loop, Print, Program


def counted_steps_program() -> Program:
    """Three suspend points, each surrounded by a line printed before and after."""
    return Program(
        steps=[
            Print("before 1"),
            Emit(1),
            Print("after 1"),
            Print("before 2"),
            Emit(2),
            Print("after 2"),
            Print("before 3"),
            Emit(3),
            Print("after 3"),
        ],
        name="counted_steps",
    )


def counted_steps() -> Iterator[int]:
    """Native counterpart of counted_steps_program()."""
    print("before 1")
    yield 1
    print("after 1")
    print("before 2")
    yield 2
    print("after 2")
    print("before 3")
    yield 3
    print("after 3")


def _increment_id(env):
    env["id"] += 1


def id_program(start: int = 1) -> Program:
    """Infinite counter: emits the current id, increments it, loops forever."""
    return Program(
        steps=[
            Loop(
                body=[
                    Emit(compute=lambda env: env["id"]),
                    Action(_increment_id, name="increment_id"),
                ]
            )
        ],
        name="id_sequence",
        initial_env={"id": start},
    )


def id_sequence(start: int = 1) -> Iterator[int]:
    """Native counterpart of id_program()."""
    current = start
    while True:
        yield current
        current += 1
