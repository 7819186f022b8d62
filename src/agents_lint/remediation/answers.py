"""Answer providers for the fix session.

A provider is a blocking callable taking the prompt and returning one
normalized answer. The terminal provider reads a line per prompt; the
scripted provider replays answers loaded up front (e.g. piped stdin).
"""
from __future__ import annotations
import sys
from collections import deque
from typing import Callable, Iterable, TextIO

AnswerProvider = Callable[[str], str]


def normalize_answer(answer: str) -> str:
    return answer.strip().lower()


class TerminalAnswers:
    """Prompt on the terminal and block for one line of input."""

    def __init__(self, stdin: TextIO | None = None, stdout: TextIO | None = None):
        self.stdin = stdin or sys.stdin
        self.stdout = stdout or sys.stdout

    def __call__(self, prompt: str) -> str:
        self.stdout.write(prompt)
        self.stdout.flush()
        line = self.stdin.readline()
        if not line:
            # EOF behaves like an empty answer (skip)
            return ""
        return normalize_answer(line)


class ScriptedAnswers:
    """Replay pre-loaded answers in order, echoing each one."""

    def __init__(self, answers: Iterable[str], stdout: TextIO | None = None):
        self.answers = deque(normalize_answer(a) for a in answers)
        self.stdout = stdout or sys.stdout

    def __call__(self, prompt: str) -> str:
        answer = self.answers.popleft() if self.answers else ""
        self.stdout.write(f"{prompt}{answer}\n")
        return answer


def read_all_answers(stream: TextIO) -> list[str]:
    """Read every answer from a non-interactive stream before the session starts."""
    return [normalize_answer(line) for line in stream.read().splitlines()]


def answers_for(stdin: TextIO | None = None, stdout: TextIO | None = None) -> AnswerProvider:
    """Terminal answers when stdin is a TTY, otherwise scripted answers read from it."""
    stdin = stdin or sys.stdin
    if stdin.isatty():
        return TerminalAnswers(stdin, stdout)
    return ScriptedAnswers(read_all_answers(stdin), stdout)
