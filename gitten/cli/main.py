"""Main entry point for the gitten CLI."""

import sys

from rich.console import Console

from gitten.cli.args import parse_args
from gitten.config import Config
from gitten.core.session import SessionController
from gitten.logging_config import get_log_file, setup_logging
from gitten.services.watcher import WorkspaceWatcher

console = Console()


def main(argv=None):
    """Main entry point for the application."""
    debug = False
    try:
        parsed_args = parse_args(argv)
        debug = parsed_args.debug

        setup_logging(verbose=parsed_args.verbose, debug=parsed_args.debug)

        config = Config(
            root_path=parsed_args.root,
            poll_interval=parsed_args.poll_interval,
            watch=not parsed_args.no_watch,
            ssh_key_path=parsed_args.ssh_key,
            tag_pattern=parsed_args.tag_pattern,
            history_limit=parsed_args.history_limit,
            verbose=parsed_args.verbose,
            debug=parsed_args.debug,
        )

        if parsed_args.debug:
            console.print("[yellow]Debug mode enabled[/yellow]")
            console.print(f"  Log file: {get_log_file()}")
            for key, value in config.to_dict().items():
                console.print(f"  {key}: {value}")

        watcher = WorkspaceWatcher(config.root_path) if config.watch else None
        session = SessionController(config, watcher=watcher)

        from gitten.tui import GittenApp

        app = GittenApp(session)
        app.run()

        return 0
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        return 1
    except Exception as e:
        console.print(f"[red]Error: {e}[/red]")
        if debug:
            console.print_exception()
        return 1


if __name__ == "__main__":
    sys.exit(main())
