"""Entry point: prints the prompt for the project saved in the durable slot."""

import sys

from lovabolt.config import get_config
from lovabolt.session import WizardSession, default_storage
from lovabolt.utils.scheduling import ManualScheduler

USAGE = """\
Usage: lovabolt [--basic] [--progress] [--clear] [--storage DIR]

  --basic        Print the short paragraph prompt instead of the detailed one.
  --progress     Print the completion percentage instead of a prompt.
  --clear        Delete the saved project.
  --storage DIR  Read the saved project from DIR instead of the configured directory.
"""


def run(variant: str = "detailed", show_progress: bool = False, clear: bool = False) -> int:
    """Load the saved project and print what was asked for. Returns an exit code."""
    session = WizardSession(storage=default_storage(), scheduler=ManualScheduler())
    try:
        if clear:
            session.clear_project()
            print("[LovaBolt] Saved project cleared.")
            return 0

        if not session.restored:
            print("[LovaBolt] No saved project found.", file=sys.stderr)
            return 1

        if show_progress:
            print(f"{session.progress}%")
            return 0

        session.set_prompt_type(variant)
        print(session.generate())
        return 0
    finally:
        session.close()


def main() -> None:
    """CLI entry point."""
    args = sys.argv[1:]

    if "-h" in args or "--help" in args:
        print(USAGE)
        return

    variant = "detailed"
    if "--basic" in args:
        variant = "basic"
        args.remove("--basic")

    show_progress = "--progress" in args
    if show_progress:
        args.remove("--progress")

    clear = "--clear" in args
    if clear:
        args.remove("--clear")

    if "--storage" in args:
        index = args.index("--storage")
        if index + 1 >= len(args):
            print(USAGE, file=sys.stderr)
            raise SystemExit(2)
        get_config()["storage_dir"] = args[index + 1]
        del args[index:index + 2]

    if args:
        print(f"Unknown arguments: {' '.join(args)}\n", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        raise SystemExit(2)

    raise SystemExit(run(variant, show_progress=show_progress, clear=clear))


if __name__ == "__main__":
    main()
