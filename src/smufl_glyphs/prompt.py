# Copyright 2020 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Yes/no confirmation prompts.

A batch of questions is asked in full before any answer is returned. A batch
that cannot be asked because stdin is not a terminal, or that the user
abandons with Ctrl-C / Ctrl-D, is answered "no" throughout, including any
"yes" given before the interruption. Missing answers also count as "no".
"""

from absl import logging
import sys
from typing import Callable, Dict, Hashable, List, Mapping, Sequence, Tuple


Question = Tuple[Hashable, str]


class Prompter:
    def confirm(self, message: str) -> bool:
        return self.confirm_all(((None, message),)).get(None, False)

    def confirm_all(self, questions: Sequence[Question]) -> Dict[Hashable, bool]:
        raise NotImplementedError()


def _parse_answer(response: str) -> bool:
    return response.strip().lower() in ("y", "yes")


class ConsolePrompter(Prompter):
    def __init__(
        self,
        input_fn: Callable[[str], str] = input,
        is_interactive: Callable[[], bool] = lambda: sys.stdin.isatty(),
    ):
        self._input = input_fn
        self._is_interactive = is_interactive

    def confirm_all(self, questions: Sequence[Question]) -> Dict[Hashable, bool]:
        answers = {key: False for key, _ in questions}
        if not questions:
            return answers
        if not self._is_interactive():
            logging.warning(
                "Not running in a terminal; answering no to %d question(s)",
                len(questions),
            )
            return answers

        for key, message in questions:
            try:
                response = self._input(f"{message} [y/N] ")
            except (EOFError, KeyboardInterrupt):
                print()
                logging.warning(
                    "Prompt cancelled; answering no to all %d question(s)",
                    len(questions),
                )
                return {k: False for k, _ in questions}
            answers[key] = _parse_answer(response)
        return answers


class ScriptedPrompter(Prompter):
    """Answers from a fixed mapping, recording what was asked."""

    def __init__(self, answers: Mapping[Hashable, bool] = None, default=False):
        self._answers = dict(answers or {})
        self._default = default
        self.batches: List[Tuple[Question, ...]] = []

    @property
    def questions(self) -> Tuple[Question, ...]:
        return tuple(q for batch in self.batches for q in batch)

    def confirm_all(self, questions: Sequence[Question]) -> Dict[Hashable, bool]:
        self.batches.append(tuple(questions))
        return {key: self._answers.get(key, self._default) for key, _ in questions}
