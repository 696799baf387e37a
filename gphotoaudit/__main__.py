"""main module"""

# pylint: disable=broad-exception-caught

import asyncio
import sys

from gphotoaudit.api import PhotosAPIError, open_client
from gphotoaudit.banner import render_main_menu_banner
from gphotoaudit.commands import get_command
from gphotoaudit.membership import MalformedItemError
from gphotoaudit.models import NoResults
from gphotoaudit.report import print_summary, save_report
from gphotoaudit.utils import OUTPUT_NAME, choices, sanitize


async def audit() -> bool:
    """
    Interactive audit loop: pick a command, run it, optionally save the result.

    Returns:
        bool: False when the user asked to quit, True otherwise.
    """
    print(render_main_menu_banner())
    raw_input = input("[?] Select a command: ").strip().lower()
    if raw_input in {"q", "quit", "exit"}:
        return False

    command = get_command(raw_input)
    if command is None:
        print(f"[!] Unknown command: {raw_input!r}")
        return True

    try:
        async with open_client() as client:
            result = await command.run(client)
    except (PhotosAPIError, MalformedItemError) as e:
        print(f"\n[!] {command.tag} failed: {e}")
        return True
    except Exception as e:
        print(f"\n[!] {command.tag} failed: {type(e).__name__}: {e}")
        return True

    print_summary(result)
    if not isinstance(result, NoResults) and choices(
        "[?] Save results as HTML? (Y/N, default N): "
    ):
        name = input(f"[?] Output file (leave blank for '{OUTPUT_NAME}'): ").strip()
        try:
            path = save_report(result, sanitize(name) if name else OUTPUT_NAME)
        except Exception as e:
            print(f"[!] Failed to save report: {e}")
        else:
            print(f"[^] Saved: {path}")

    return choices("[?] Do you want to run another audit? (Y/N, default N): ")


async def main():
    """
    The main function that runs the program.
    """
    try:
        while await audit():
            pass
    except KeyboardInterrupt:
        print("\n[!] Exiting...")
        sys.exit(0)


def run() -> None:
    """Console script entry point."""
    asyncio.run(main())


if __name__ == "__main__":
    run()
