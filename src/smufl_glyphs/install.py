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

"""Copies generated files into a destination directory.

Nothing already in the destination is overwritten without asking, unless
forced. The safe path goes:

1. probe the destination for each file (concurrently)
2. copy files that aren't there yet, refusing to clobber anything that
   appeared since the probe
3. skip files whose installed copy is byte-identical
4. ask once, as a batch, about every remaining file
5. overwrite the ones the user said yes to

Any filesystem error other than "directory already exists" on creation and
"file not found" on probing is fatal. Copies that completed before the error
are left in place.
"""

from absl import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
import enum
from pathlib import Path
import shutil
from smufl_glyphs.prompt import ConsolePrompter, Prompter
from typing import Callable, Dict, Iterable, List, NamedTuple, Optional, Sequence, Union


class InstallDecision(enum.Enum):
    COPY = "copy"
    SKIP_IDENTICAL = "skip_identical"
    SKIP_DECLINED = "skip_declined"
    OVERWRITE_CONFIRMED = "overwrite_confirmed"


# Filesystem outcomes. Callers dispatch on type rather than on errno.


@dataclass(frozen=True)
class Created:
    path: Path


@dataclass(frozen=True)
class AlreadyExists:
    path: Path


@dataclass(frozen=True)
class Found:
    path: Path
    content: bytes


@dataclass(frozen=True)
class NotFound:
    path: Path


@dataclass(frozen=True)
class Failed:
    path: Path
    cause: OSError


MkdirOutcome = Union[Created, AlreadyExists, Failed]
ProbeOutcome = Union[Found, NotFound, Failed]


class Destination(NamedTuple):
    path: Path
    created: bool


@dataclass(frozen=True)
class Conflict:
    source: Path
    destination: Path
    existing: bytes


def _mkdir(path: Path) -> MkdirOutcome:
    try:
        path.mkdir()
    except FileExistsError:
        return AlreadyExists(path)
    except OSError as e:
        return Failed(path, e)
    return Created(path)


def _probe(path: Path) -> ProbeOutcome:
    try:
        return Found(path, path.read_bytes())
    except FileNotFoundError:
        return NotFound(path)
    except OSError as e:
        return Failed(path, e)


def _concurrently(fn: Callable, items: Sequence) -> List:
    if not items:
        return []
    with ThreadPoolExecutor(max_workers=len(items)) as executor:
        return list(executor.map(fn, items))


def ensure_destination(path: Path) -> Destination:
    path = Path(path)
    outcome = _mkdir(path)
    if isinstance(outcome, Failed):
        raise outcome.cause
    if isinstance(outcome, Created):
        logging.info("Created %s", path)
        return Destination(path, True)
    return Destination(path, False)


def _copy_exclusive(source: Path, dest: Path):
    # "xb" fails if anything appeared at dest since it was probed
    with open(source, "rb") as src_file, open(dest, "xb") as dest_file:
        shutil.copyfileobj(src_file, dest_file)


def copy_resources(files: Iterable[Path], dest: Path, overwrite: bool = True):
    """Copy each file into dest, concurrently."""
    dest = Path(dest)

    def _copy(file: Path):
        target = dest / file.name
        if overwrite:
            shutil.copyfile(file, target)
        else:
            _copy_exclusive(file, target)
        logging.info("Copied %s to %s", file.name, dest)

    _concurrently(_copy, [Path(f) for f in files])


def _find_conflicts(files: Sequence[Path], dest: Path):
    safe_files = []
    conflicts = []
    outcomes = _concurrently(_probe, [dest / f.name for f in files])
    for file, outcome in zip(files, outcomes):
        if isinstance(outcome, Failed):
            raise outcome.cause
        if isinstance(outcome, NotFound):
            safe_files.append(file)
        else:
            conflicts.append(Conflict(file, outcome.path, outcome.content))
    return safe_files, conflicts


def resolve_conflicts(
    conflicts: Sequence[Conflict], dest: Path, prompter: Prompter
) -> Dict[Path, InstallDecision]:
    decisions = {}
    clashing = []
    for conflict in conflicts:
        if conflict.source.read_bytes() == conflict.existing:
            logging.info(
                "Skipped copying %s as it is already installed", conflict.source.name
            )
            decisions[conflict.source] = InstallDecision.SKIP_IDENTICAL
        else:
            clashing.append(conflict)

    if not clashing:
        return decisions

    # Ask everything up front; nothing is overwritten until all are answered
    answers = prompter.confirm_all(
        [
            (
                c.source,
                f"A different {c.source.name} was found in {dest}. "
                "Are you sure you want to overwrite it?",
            )
            for c in clashing
        ]
    )

    for conflict in clashing:
        if answers.get(conflict.source, False):
            copy_resources([conflict.source], dest)
            decisions[conflict.source] = InstallDecision.OVERWRITE_CONFIRMED
        else:
            logging.warning(
                "Did not copy %s to %s. It was not installed.",
                conflict.source.name,
                dest,
            )
            decisions[conflict.source] = InstallDecision.SKIP_DECLINED
    return decisions


def copy_safely(
    files: Iterable[Path], dest: Path, prompter: Prompter
) -> Dict[Path, InstallDecision]:
    files = [Path(f) for f in files]
    dest = Path(dest)

    safe_files, conflicts = _find_conflicts(files, dest)
    copy_resources(safe_files, dest, overwrite=False)

    decisions = {f: InstallDecision.COPY for f in safe_files}
    decisions.update(resolve_conflicts(conflicts, dest, prompter))
    # report in input order
    return {f: decisions[f] for f in files}


def install_all(
    files: Iterable[Path],
    destination: Path,
    force: bool = False,
    prompter: Optional[Prompter] = None,
) -> Dict[Path, InstallDecision]:
    files = [Path(f) for f in files]
    if force:
        logging.warning(
            "Installing with --force. Any checks for conflicts will be skipped."
        )

    dest = ensure_destination(destination)

    if force or dest.created:
        copy_resources(files, dest.path)
        return {f: InstallDecision.COPY for f in files}

    if prompter is None:
        prompter = ConsolePrompter()
    return copy_safely(files, dest.path, prompter)
