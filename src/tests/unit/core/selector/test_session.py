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

from hunkpick.core.selector.session import PatchSession


def test_status_suffix():
    session = PatchSession()
    assert session.status_suffix == ""

    session.global_filter_pattern = "TODO"
    assert session.status_suffix == " [filter: TODO]"

    session.auto_split_enabled = True
    assert session.status_suffix == " [filter: TODO] [auto-split]"
