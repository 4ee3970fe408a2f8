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

from dataclasses import dataclass
from typing import Literal

AddDel = Literal["create", "delete"]


@dataclass
class FileStatus:
    path: str
    binary: bool = False
    # "unchanged", "binary" or "+added/-deleted"
    index: str = "unchanged"
    # "nothing", "binary" or "+added/-deleted"
    worktree: str = "nothing"
    index_add_del: AddDel | None = None
    worktree_add_del: AddDel | None = None
    unmerged: bool = False

    @property
    def is_patchable(self) -> bool:
        """Binary and unmerged files cannot be reviewed hunk by hunk."""
        return not self.binary and not self.unmerged
