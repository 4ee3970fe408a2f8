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

from colorama import Fore, Style


@dataclass(frozen=True)
class Theme:
    name: str
    styles: dict[str, str]
    reset: str

    def apply(self, key: str, text: str) -> str:
        prefix = self.styles.get(key, "")
        if not prefix:
            return text
        return f"{prefix}{text}{self.reset}"


def _build_themes() -> dict[str, Theme]:
    reset = Style.RESET_ALL
    return {
        "classic": Theme(
            name="classic",
            reset=reset,
            styles={
                "prompt": Fore.BLUE + Style.BRIGHT,
                "header": Fore.WHITE + Style.BRIGHT,
                "help": Fore.RED + Style.BRIGHT,
                "error": Fore.RED + Style.BRIGHT,
                "status": Fore.CYAN,
                "label": Fore.CYAN,
                "value": Fore.GREEN,
                "source": Fore.YELLOW,
                "diff_header": Fore.WHITE + Style.BRIGHT,
                "diff_hunk": Fore.CYAN,
                "diff_removed": Fore.RED,
                "diff_added": Fore.GREEN,
            },
        ),
        "ocean": Theme(
            name="ocean",
            reset=reset,
            styles={
                "prompt": Fore.CYAN + Style.BRIGHT,
                "header": Fore.BLUE + Style.BRIGHT,
                "help": Fore.MAGENTA + Style.BRIGHT,
                "error": Fore.RED + Style.BRIGHT,
                "status": Fore.BLUE,
                "label": Fore.CYAN,
                "value": Fore.WHITE + Style.BRIGHT,
                "source": Fore.BLUE,
                "diff_header": Fore.CYAN,
                "diff_hunk": Fore.CYAN + Style.DIM,
                "diff_removed": Fore.RED,
                "diff_added": Fore.GREEN,
            },
        ),
        "mono": Theme(
            name="mono",
            reset="",
            styles={},
        ),
    }


_THEMES = _build_themes()


def get_theme(name: str | None, color: bool = True) -> Theme:
    """Look up a theme by name; colors off always yields the plain theme."""
    if not color:
        return _THEMES["mono"]
    return _THEMES.get(name or "classic", _THEMES["classic"])


def available_themes() -> list[str]:
    return sorted(_THEMES.keys())


def colorize_diff_line(theme: Theme, line: str) -> str:
    """Color a plain diff line when git did not provide a colored rendering."""
    if line.startswith("@@"):
        return theme.apply("diff_hunk", line)
    if line.startswith(("+++", "---", "diff ", "index ")):
        return theme.apply("diff_header", line)
    if line.startswith("+"):
        return theme.apply("diff_added", line)
    if line.startswith("-"):
        return theme.apply("diff_removed", line)
    return line
