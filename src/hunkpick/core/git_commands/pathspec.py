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

import posixpath


def _strip_magic(pathspec: str) -> str:
    # ":(top,prefix:0)dir/" -> "dir/"
    if pathspec.startswith(":("):
        close = pathspec.find(")")
        if close != -1:
            return pathspec[close + 1 :]
    return pathspec


def _normalize(path: str) -> str:
    while path.startswith("./"):
        path = path[2:]
    if path in ("", "."):
        return ""
    normalized = posixpath.normpath(path)
    return normalized + "/" if path.endswith("/") else normalized


def matches_pathspec(pathspec: str, target: str) -> bool:
    """Match a repository-relative path against a (simple) user pathspec."""
    if pathspec == target:
        return True

    actual = _normalize(_strip_magic(pathspec))
    if not actual.strip("/"):
        return True
    if actual == target:
        return True
    # a directory matches everything below it, with or without the slash
    return target.startswith(actual.rstrip("/") + "/")


def filter_paths(pathspecs: list[str], paths: list[str]) -> list[str]:
    if not pathspecs:
        return list(paths)
    return [p for p in paths if any(matches_pathspec(spec, p) for spec in pathspecs)]
