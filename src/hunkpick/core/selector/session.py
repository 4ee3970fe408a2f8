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


@dataclass
class PatchSession:
    """
    State shared by every file of one patch run.

    global_filter_pattern: regex applied to each file's hunks ("" = off).
    auto_split_enabled: split every file's hunks as far as possible first.
    """

    global_filter_pattern: str = ""
    auto_split_enabled: bool = False

    @property
    def status_suffix(self) -> str:
        info = ""
        if self.global_filter_pattern:
            info += f" [filter: {self.global_filter_pattern}]"
        if self.auto_split_enabled:
            info += " [auto-split]"
        return info
