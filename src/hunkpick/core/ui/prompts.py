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

"""Prompt and help texts for every patch mode."""

from hunkpick.core.data.hunk import HunkKind

# %s receives the extra options, e.g. ",k,j,g,G,A,s,S,e"
PATCH_PROMPTS: dict[str, dict[str, str]] = {
    "stage": {
        "hunk": "Stage this hunk [y,n,q,a,d%s,?]? ",
        "mode": "Stage mode change [y,n,q,a,d%s,?]? ",
        "deletion": "Stage deletion [y,n,q,a,d%s,?]? ",
        "addition": "Stage addition [y,n,q,a,d%s,?]? ",
    },
    "reset_head": {
        "hunk": "Unstage this hunk [y,n,q,a,d%s,?]? ",
        "mode": "Unstage mode change [y,n,q,a,d%s,?]? ",
        "deletion": "Unstage deletion [y,n,q,a,d%s,?]? ",
        "addition": "Unstage addition [y,n,q,a,d%s,?]? ",
    },
    "checkout_index": {
        "hunk": "Discard this hunk from worktree [y,n,q,a,d%s,?]? ",
        "mode": "Discard mode change from worktree [y,n,q,a,d%s,?]? ",
        "deletion": "Discard deletion from worktree [y,n,q,a,d%s,?]? ",
        "addition": "Discard addition from worktree [y,n,q,a,d%s,?]? ",
    },
    "reset_nothead": {
        "hunk": "Apply this hunk to index [y,n,q,a,d%s,?]? ",
        "mode": "Apply mode change to index [y,n,q,a,d%s,?]? ",
        "deletion": "Apply deletion to index [y,n,q,a,d%s,?]? ",
        "addition": "Apply addition to index [y,n,q,a,d%s,?]? ",
    },
    "checkout_head": {
        "hunk": "Discard this hunk from index and worktree [y,n,q,a,d%s,?]? ",
        "mode": "Discard mode change from index and worktree [y,n,q,a,d%s,?]? ",
        "deletion": "Discard deletion from index and worktree [y,n,q,a,d%s,?]? ",
        "addition": "Discard addition from index and worktree [y,n,q,a,d%s,?]? ",
    },
    "checkout_nothead": {
        "hunk": "Apply this hunk to index and worktree [y,n,q,a,d%s,?]? ",
        "mode": "Apply mode change to index and worktree [y,n,q,a,d%s,?]? ",
        "deletion": "Apply deletion to index and worktree [y,n,q,a,d%s,?]? ",
        "addition": "Apply addition to index and worktree [y,n,q,a,d%s,?]? ",
    },
    "worktree_head": {
        "hunk": "Discard this hunk from worktree [y,n,q,a,d%s,?]? ",
        "mode": "Discard mode change from worktree [y,n,q,a,d%s,?]? ",
        "deletion": "Discard deletion from worktree [y,n,q,a,d%s,?]? ",
        "addition": "Discard addition from worktree [y,n,q,a,d%s,?]? ",
    },
    "worktree_nothead": {
        "hunk": "Apply this hunk to worktree [y,n,q,a,d%s,?]? ",
        "mode": "Apply mode change to worktree [y,n,q,a,d%s,?]? ",
        "deletion": "Apply deletion to worktree [y,n,q,a,d%s,?]? ",
        "addition": "Apply addition to worktree [y,n,q,a,d%s,?]? ",
    },
    "stash": {
        "hunk": "Stash this hunk [y,n,q,a,d%s,?]? ",
        "mode": "Stash mode change [y,n,q,a,d%s,?]? ",
        "deletion": "Stash deletion [y,n,q,a,d%s,?]? ",
        "addition": "Stash addition [y,n,q,a,d%s,?]? ",
    },
}

PATCH_HELP: dict[str, str] = {
    "stage": """y - stage this hunk
n - do not stage this hunk
q - quit; do not stage this hunk or any of the remaining ones
a - stage this hunk and all later hunks in the file
d - do not stage this hunk or any of the later hunks in the file""",
    "reset_head": """y - unstage this hunk
n - do not unstage this hunk
q - quit; do not unstage this hunk or any of the remaining ones
a - unstage this hunk and all later hunks in the file
d - do not unstage this hunk or any of the later hunks in the file""",
    "checkout_index": """y - discard this hunk from worktree
n - do not discard this hunk from worktree
q - quit; do not discard this hunk or any of the remaining ones
a - discard this hunk and all later hunks in the file
d - do not discard this hunk or any of the later hunks in the file""",
    "reset_nothead": """y - apply this hunk to index
n - do not apply this hunk to index
q - quit; do not apply this hunk or any of the remaining ones
a - apply this hunk and all later hunks in the file
d - do not apply this hunk or any of the later hunks in the file""",
    "checkout_head": """y - discard this hunk from index and worktree
n - do not discard this hunk from index and worktree
q - quit; do not discard this hunk or any of the remaining ones
a - discard this hunk and all later hunks in the file
d - do not discard this hunk or any of the later hunks in the file""",
    "checkout_nothead": """y - apply this hunk to index and worktree
n - do not apply this hunk to index and worktree
q - quit; do not apply this hunk or any of the remaining ones
a - apply this hunk and all later hunks in the file
d - do not apply this hunk or any of the later hunks in the file""",
    "worktree_head": """y - discard this hunk from worktree
n - do not discard this hunk from worktree
q - quit; do not discard this hunk or any of the remaining ones
a - discard this hunk and all later hunks in the file
d - do not discard this hunk or any of the later hunks in the file""",
    "worktree_nothead": """y - apply this hunk to worktree
n - do not apply this hunk to worktree
q - quit; do not apply this hunk or any of the remaining ones
a - apply this hunk and all later hunks in the file
d - do not apply this hunk or any of the later hunks in the file""",
    "stash": """y - stash this hunk
n - do not stash this hunk
q - quit; do not stash this hunk or any of the remaining ones
a - stash this hunk and all later hunks in the file
d - do not stash this hunk or any of the later hunks in the file""",
}

EXTRA_HELP = """/ - search for a pattern in current file
g - select a hunk to go to
G - set global filter for all files (empty pattern clears filter)
A - accept all hunks (after auto-splitting and filtering)
j - leave this hunk undecided, see next undecided hunk
k - leave this hunk undecided, see previous undecided hunk
s - split the current hunk into smaller hunks
S - enable auto-splitting globally and split all hunks
e - manually edit the current hunk
? - print help"""


def prompt_for(mode_name: str, kind: HunkKind, options: str) -> str:
    """Return the question asked for a hunk of this kind in this mode."""
    # header pseudo-hunks are never prompted for, treat anything unknown as a hunk
    key = kind.value if kind.value in ("mode", "deletion", "addition") else "hunk"
    prompts = PATCH_PROMPTS.get(mode_name, PATCH_PROMPTS["stage"])
    return prompts[key] % options


def help_for(mode_name: str, full: bool = False) -> str:
    text = PATCH_HELP.get(mode_name, PATCH_HELP["stage"])
    if full:
        text += "\n" + EXTRA_HELP
    return text
