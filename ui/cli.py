from __future__ import annotations

from firstboot_installer.main import main as core_main


def main(argv: list[str] | None = None) -> int:
    # The console wrapper and `python -m firstboot_installer` must behave the same.
    return core_main(argv)


if __name__ == "__main__":
    raise SystemExit(main())
