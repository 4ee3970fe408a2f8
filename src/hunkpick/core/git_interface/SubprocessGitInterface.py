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

import subprocess
from pathlib import Path

from loguru import logger

from .interface import GitInterface


def _truncate(text: str, limit: int = 2000) -> str:
    return text[:limit] + ("...(truncated)" if len(text) > limit else "")


class SubprocessGitInterface(GitInterface):
    def __init__(self, repo_path: str | Path | None = None) -> None:
        # Ensure repo_path is a Path object for consistency
        if isinstance(repo_path, Path):
            self.repo_path = repo_path
        else:
            self.repo_path = Path(repo_path or ".")

    def run_git_text_out(
        self,
        args: list[str],
        input_text: str | None = None,
        env: dict | None = None,
        cwd: str | Path | None = None,
    ) -> str | None:
        result = self.run_git_text(args, input_text, env, cwd)
        return result.stdout if result else None

    def run_git_binary_out(
        self,
        args: list[str],
        input_bytes: bytes | None = None,
        env: dict | None = None,
        cwd: str | Path | None = None,
    ) -> bytes | None:
        result = self.run_git_binary(args, input_bytes, env, cwd)
        return result.stdout if result else None

    def run_git_text(
        self,
        args: list[str],
        input_text: str | None = None,
        env: dict | None = None,
        cwd: str | Path | None = None,
        check: bool = True,
    ) -> subprocess.CompletedProcess[str] | None:
        effective_cwd = str(cwd) if cwd is not None else str(self.repo_path)
        cmd = ["git"] + args
        logger.debug(f"Running git text command: {' '.join(cmd)} cwd={effective_cwd}")
        try:
            result = subprocess.run(
                cmd,
                input=input_text,
                text=True,
                encoding="utf-8",
                errors="replace",
                capture_output=True,
                check=check,
                env=env,
                cwd=effective_cwd,
            )
        except subprocess.CalledProcessError as e:
            logger.debug(
                f"Git text command failed: {' '.join(e.cmd)} code={e.returncode} stderr={e.stderr}"
            )
            return None
        except OSError as e:
            logger.warning(f"Could not run git: {e}")
            return None

        if result.stdout:
            logger.debug(f"git stdout (text): {_truncate(result.stdout)}")
        if result.stderr:
            logger.debug(f"git stderr (text): {_truncate(result.stderr)}")
        logger.debug(f"git returncode: {result.returncode}")
        return result

    def run_git_binary(
        self,
        args: list[str],
        input_bytes: bytes | None = None,
        env: dict | None = None,
        cwd: str | Path | None = None,
        check: bool = True,
    ) -> subprocess.CompletedProcess[bytes] | None:
        effective_cwd = str(cwd) if cwd is not None else str(self.repo_path)
        cmd = ["git"] + args
        logger.debug(f"Running git binary command: {' '.join(cmd)} cwd={effective_cwd}")
        try:
            result = subprocess.run(
                cmd,
                input=input_bytes,
                text=False,
                capture_output=True,
                check=check,
                env=env,
                cwd=effective_cwd,
            )
        except subprocess.CalledProcessError as e:
            logger.debug(
                f"Git binary command failed: {' '.join(e.cmd)} code={e.returncode} "
                f"stderr={e.stderr.decode('utf-8', errors='ignore')}"
            )
            return None
        except OSError as e:
            logger.warning(f"Could not run git: {e}")
            return None

        if result.stdout:
            logger.debug(f"git stdout (binary length): {len(result.stdout)} bytes")
        if result.stderr:
            logger.debug(f"git stderr (binary): {_truncate(repr(result.stderr))}")
        logger.debug(f"git returncode: {result.returncode}")
        return result
