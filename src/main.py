import sys
import logging
import setproctitle

from src.local.config import effective_settings as config
from src.log.setup import setup_logging
import src.local.console as console

log = logging.getLogger("console")


def main(argv=None) -> int:
    """The main entry point for the launcher."""
    argv = sys.argv[1:] if argv is None else argv
    args = list(argv)

    verbose = config.VERBOSE_LOGGING
    if "--verbose" in args:
        verbose = True
        args.remove("--verbose")
    setup_logging(logging.DEBUG if verbose else logging.INFO)

    command, args = (args[0].lower(), args[1:]) if args else ("run", [])
    if command == "run":
        setproctitle.setproctitle(f"{config.APP_DISPLAY_NAME} - Launcher")
        log.info("=" * 20 + " Launcher Starting " + "=" * 20)

    if not console.execute_command(command, args):
        console.print_help()
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
