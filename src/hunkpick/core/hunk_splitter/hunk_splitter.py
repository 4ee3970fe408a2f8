# -----------------------------------------------------------------------------
# /*
#  * Copyright (C) 2025 CodeStory
#  *
#  * This program is free software; you can redistribute it and/or modify
#  * it under the terms of the GNU General Public License as published by
#  * the Free Software Foundation; Version 2.
#  *
#  * This program is distributed in the hope that it will be useful,
#  * but WITHOUT ANY WARRANTY; without even the implied warranty of
#  * MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
#  * GNU General Public License for more details.
#  *
#  * You should have received a copy of the GNU General Public License
#  * along with this program; if not, you can contact us at support@codestory.build
#  */
# -----------------------------------------------------------------------------

"""
Splitting of a hunk into smaller, independently applicable hunks.

A hunk can be split at a context line that follows a block of changes when
more changes come after it. Only the first such point is used per split, so
the result is always two hunks. Both halves keep the split context line, which
lets each of them apply on its own; the right half's start lines are shifted
back by one to account for that shared line.
"""

from loguru import logger

from hunkpick.constants import MAX_AUTO_SPLIT_ROUNDS
from hunkpick.core.data.hunk import Decision, Hunk, HunkKind
from hunkpick.core.data.hunk_header import count_body_lines, format_hunk_header


def _is_change(line: str) -> bool:
    return line.startswith(("+", "-"))


def find_split_point(hunk: Hunk) -> int | None:
    """
    Return the body index (header excluded) of the first context line that
    separates two change blocks, or None if the hunk cannot be split.
    """
    if hunk.kind is not HunkKind.CHANGE or hunk.edited:
        return None

    body = hunk.body
    seen_change = False
    for i, line in enumerate(body):
        if line.startswith("\\"):
            continue
        if _is_change(line):
            seen_change = True
        elif line.startswith(" ") and seen_change:
            if any(_is_change(rest) for rest in body[i + 1 :]):
                return i
    return None


def is_splittable(hunk: Hunk) -> bool:
    return find_split_point(hunk) is not None


def _build_part(
    body: list[str],
    display_body: list[str],
    old_start: int,
    new_start: int,
) -> Hunk:
    old_count, new_count = count_body_lines(body)
    header = format_hunk_header(old_start, old_count, new_start, new_count)
    return Hunk(
        kind=HunkKind.CHANGE,
        raw_lines=[header] + body,
        display_lines=[header] + display_body,
        old_start=old_start,
        old_count=old_count,
        new_start=new_start,
        new_count=new_count,
    )


def split_hunk(hunk: Hunk) -> list[Hunk]:
    """
    Split a hunk at its first split point.

    Returns two fresh UNDECIDED hunks, or [hunk] unchanged when it is not
    splittable.
    """
    point = find_split_point(hunk)
    if point is None:
        return [hunk]

    body = hunk.body
    display_body = hunk.display_lines[1:]

    left = _build_part(
        body[: point + 1],
        display_body[: point + 1],
        hunk.old_start,
        hunk.new_start,
    )
    right = _build_part(
        body[point:],
        display_body[point:],
        hunk.old_start + left.old_count - 1,
        hunk.new_start + left.new_count - 1,
    )
    return [left, right]


def auto_split(hunks: list[Hunk], max_rounds: int = MAX_AUTO_SPLIT_ROUNDS) -> list[Hunk]:
    """
    Split every undecided hunk until nothing changes or max_rounds passes ran.

    Returns a new list; decided hunks are carried over as they are.
    """
    current = list(hunks)

    for round_no in range(1, max_rounds + 1):
        expanded: list[Hunk] = []
        for hunk in current:
            if hunk.decision is Decision.UNDECIDED:
                expanded.extend(split_hunk(hunk))
            else:
                expanded.append(hunk)

        if len(expanded) == len(current):
            break

        logger.debug(
            f"Auto-split round {round_no}: {len(current)} -> {len(expanded)} hunks"
        )
        current = expanded

    return current
