from __future__ import annotations

import sys
from typing import Any

from tqdm import tqdm
from tqdm.std import tqdm as TqdmType

"""Progress display service with tqdm (TTY only).

- 単一 tqdm インスタンス (非 TTY では無効化し ANSI 制御文字を出さない)
- TTY 判定は sys.stdout.isatty()

The bar advances once per selected sheet; its postfix shows how many sheets
were converted / skipped and the running game count.
"""

__all__ = [
    "ProgressTracker",
    "is_tty_enabled",
]


def is_tty_enabled() -> bool:
    """Check if TTY output is enabled.

    Returns:
        True if stdout is a TTY and progress should be displayed, False otherwise
    """
    return sys.stdout.isatty()


class ProgressTracker:
    """Progress tracker using tqdm for sheet conversion.

    In non-TTY environments (CI, piping JSON to stdout) the bar is disabled
    but counters are still maintained.
    """

    def __init__(self, total_sheets: int, *, description: str = "Converting sheets") -> None:
        self.total_sheets = total_sheets
        self.description = description
        self.current_sheet = 0
        self.converted = 0
        self.skipped = 0
        self.games = 0

        self.enabled = is_tty_enabled()
        self.pbar: TqdmType[Any] | None
        if self.enabled:
            self.pbar = tqdm(
                total=total_sheets,
                desc=description,
                unit="sheet",
                disable=False,
                leave=True,
                position=0,
                ncols=80,
                ascii=True,
            )
        else:
            self.pbar = None

    def start_sheet(self, sheet_name: str) -> None:
        self.current_sheet += 1
        if self.enabled and self.pbar is not None:
            self.pbar.set_description(f"{self.description} ({sheet_name})")

    def finish_sheet(self, success: bool = True, games: int = 0) -> None:
        """Finish a sheet.

        Args:
            success: Whether the sheet produced a vendor bundle
            games: Number of games converted from the sheet
        """
        if success:
            self.converted += 1
            self.games += games
        else:
            self.skipped += 1
        if self.enabled and self.pbar is not None:
            self.pbar.update(1)
            self.pbar.set_postfix(converted=self.converted, skipped=self.skipped, games=self.games)
            self.pbar.set_description(self.description)

    def close(self) -> None:
        if self.enabled and self.pbar is not None:
            self.pbar.close()
            self.pbar = None

    def __enter__(self) -> ProgressTracker:
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.close()
