"""Dialog where the user grants or revokes usage access."""
import os
import sys
import argparse
from typing import List, Optional
from PyQt5.QtWidgets import (
    QApplication, QDialog, QVBoxLayout, QCheckBox,
    QDialogButtonBox, QLabel, QWidget
)
from PyQt5.QtCore import Qt
from ..config import ACCESS_PATH, OPSTR_GET_USAGE_STATS, settings
from ..models import OpMode
from ..platform.access import load_access_table, lookup_mode, set_mode


class AccessDialog(QDialog):
    """Toggle for one operation of one package in the access table."""

    def __init__(self, op: str, package: str, access_path: str,
                 parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.op = op
        self.package = package
        self.access_path = access_path

        self.setWindowTitle("Usage Access")
        self.setWindowFlags(self.windowFlags() & ~Qt.WindowContextHelpButtonHint)  # pyright: ignore[reportUnknownMemberType, reportAttributeAccessIssue, reportUnknownArgumentType]
        self.setMinimumWidth(350)

        layout = QVBoxLayout()
        self.setLayout(layout)

        intro = QLabel(
            f"<b>{package}</b> is asking to read how long each application "
            "has been in the foreground."
        )
        intro.setWordWrap(True)
        layout.addWidget(intro)

        self.allow_check = QCheckBox("Permit usage access")
        self.allow_check.setChecked(self._current_mode() == OpMode.ALLOWED)
        layout.addWidget(self.allow_check)

        path_help = QLabel(f"Stored in {access_path}")
        path_help.setStyleSheet("color: gray; font-size: 10px;")
        layout.addWidget(path_help)

        layout.addSpacing(20)

        buttons = QDialogButtonBox(
            QDialogButtonBox.StandardButton.Ok | QDialogButtonBox.StandardButton.Cancel  # pyright: ignore[reportArgumentType, reportCallIssue]
        )
        buttons.accepted.connect(self.save_and_close)  # pyright: ignore[reportUnknownMemberType]
        buttons.rejected.connect(self.reject)  # pyright: ignore[reportUnknownMemberType]
        layout.addWidget(buttons)

    def _current_mode(self) -> OpMode:
        try:
            table = load_access_table(self.access_path)
        except (ValueError, OSError):
            return OpMode.ERRORED
        return lookup_mode(table, self.op, os.getuid(), self.package)

    def save_and_close(self) -> None:
        """Save the choice and close dialog."""
        mode = OpMode.ALLOWED if self.allow_check.isChecked() else OpMode.IGNORED
        set_mode(self.access_path, self.op, self.package, mode)
        self.accept()


def main(argv: Optional[List[str]] = None) -> int:
    """Run the dialog as its own process."""
    parser = argparse.ArgumentParser(description="Grant usage access")
    parser.add_argument("--op", default=OPSTR_GET_USAGE_STATS)
    parser.add_argument("--package", default=settings.package_name)
    parser.add_argument("--access-file", default=ACCESS_PATH)
    args = parser.parse_args(argv)

    app = QApplication(sys.argv[:1])
    dialog = AccessDialog(args.op, args.package, args.access_file)
    dialog.show()
    return app.exec_()


if __name__ == "__main__":
    sys.exit(main())
