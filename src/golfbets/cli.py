"""
Command line interface for the golf betting engine.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from tabulate import tabulate

from golfbets.config.error_aggregator import get_error_aggregator
from golfbets.config.logging import setup_logging
from golfbets.config.logging_config import load_logging_config
from golfbets.config.settings import ConfigurationManager
from golfbets.config.utils import get_config_dir, resolve_path
from golfbets.exceptions import GolfBetsError, handle_errors
from golfbets.services.result_formatter import (
    TABLE_FORMAT,
    format_report,
    format_result,
    report_to_dict,
    result_to_dict,
)
from golfbets.services.round_loader import load_round
from golfbets.services.round_service import RoundService
from golfbets.utils.cli_utils import (
    ArgumentValidator,
    CLIBuilder,
    CLIContext,
    CLIOptionFactory,
    CommandCategory,
    CommandRegistry,
)
from golfbets.utils.logging_utils import get_logger


def _load_service(ctx: CLIContext) -> RoundService:
    return RoundService(load_round(ctx.args.round_file), ctx.settings)


def _print_json(data: Any) -> None:
    print(json.dumps(data, indent=2))


class ShowCommands:
    """Show command implementations."""

    @staticmethod
    @CommandRegistry.register(
        name='allocate',
        help_text='Show playing handicaps and strokes received per hole',
        category=CommandCategory.SHOW,
        options=[
            CLIOptionFactory.create_round_file_option(),
            CLIOptionFactory.create_format_option()
        ]
    )
    def show_allocations(ctx: CLIContext) -> int:
        """Print the stroke allocation of every player."""
        service = _load_service(ctx)
        handicaps = service.playing_handicaps
        if ctx.args.format == 'json':
            _print_json({
                pid: {
                    "playing_handicap": handicaps[pid],
                    "strokes": {str(n): s for n, s in allocation.items()},
                }
                for pid, allocation in service.allocations.items()
            })
            return 0

        numbers = [h.number for h in service.holes]
        rows = [
            [p.name, handicaps[p.id]] + [service.allocations[p.id][n] for n in numbers]
            for p in service.players
        ]
        print(tabulate(rows, headers=["Player", "HCP", *numbers], tablefmt=TABLE_FORMAT))
        return 0

    @staticmethod
    @CommandRegistry.register(
        name='results',
        help_text='Show the result of every game in the round',
        category=CommandCategory.SHOW,
        options=[
            CLIOptionFactory.create_round_file_option(),
            CLIOptionFactory.create_format_option()
        ]
    )
    def show_results(ctx: CLIContext) -> int:
        """Print game results."""
        service = _load_service(ctx)
        results = service.evaluate()
        places = ctx.settings.currency_places
        if ctx.args.format == 'json':
            _print_json([result_to_dict(r, places) for r in results])
            return 0
        if not results:
            print("No games configured")
            return 0
        print("\n\n".join(format_result(r, service.player_names, places) for r in results))
        return 0

    @staticmethod
    @CommandRegistry.register(
        name='standings',
        help_text='Show the stroke play leaderboard',
        category=CommandCategory.SHOW,
        options=[
            CLIOptionFactory.create_round_file_option(),
            CLIOptionFactory.create_format_option(),
            {
                'name': '--net',
                'action': 'store_true',
                'help': 'Rank by net total with the handicap prorated over holes played'
            }
        ]
    )
    def show_standings(ctx: CLIContext) -> int:
        """Print the leaderboard."""
        service = _load_service(ctx)
        standings = service.standings(use_net=ctx.args.net)
        if ctx.args.format == 'json':
            _print_json([
                {
                    "position": s.position,
                    "player_id": s.player_id,
                    "gross": s.gross,
                    "net": s.net,
                    "holes_played": s.holes_played,
                }
                for s in standings
            ])
            return 0
        names = service.player_names
        rows = [[s.position, names[s.player_id], s.holes_played, s.gross, s.net] for s in standings]
        print(tabulate(rows, headers=["Pos", "Player", "Thru", "Gross", "Net"], tablefmt=TABLE_FORMAT))
        return 0

    @staticmethod
    @CommandRegistry.register(
        name='skins-pot',
        help_text='Show what the skins pot is worth on a hole',
        category=CommandCategory.SHOW,
        options=[
            CLIOptionFactory.create_round_file_option(),
            {**CLIOptionFactory.create_hole_option(), 'required': True}
        ]
    )
    def show_skins_pot(ctx: CLIContext) -> int:
        """Print the skins pot riding on a hole."""
        service = _load_service(ctx)
        context = service.skins_hole_context(ctx.args.hole)
        if context is None:
            ctx.logger.error("Round has no skins game")
            return 1
        print(f"Hole {context.hole_number}: {context.message}")
        return 0


class SettleCommands:
    """Settle command implementations."""

    @staticmethod
    @CommandRegistry.register(
        name='settle',
        help_text='Net all games and prop bets into payments',
        category=CommandCategory.SETTLE,
        options=[
            CLIOptionFactory.create_round_file_option(),
            CLIOptionFactory.create_format_option()
        ]
    )
    def settle(ctx: CLIContext) -> int:
        """Print balances and settlements."""
        service = _load_service(ctx)
        report = service.settle()
        places = ctx.settings.currency_places
        if ctx.args.format == 'json':
            _print_json(report_to_dict(report, places))
        else:
            print(format_report(report, service.player_names, places))
        return 0


class CheckCommands:
    """Check command implementations."""

    @staticmethod
    @CommandRegistry.register(
        name='check',
        help_text='Validate a round file without evaluating it',
        category=CommandCategory.CHECK,
        options=[CLIOptionFactory.create_round_file_option()]
    )
    def check_round(ctx: CLIContext) -> int:
        """Load and validate a round."""
        service = _load_service(ctx)
        games = ", ".join(g.game_type for g in service.games) or "none"
        print(f"OK: {len(service.players)} players, {service.total_holes} holes, games: {games}")
        return 0


def create_parser() -> argparse.ArgumentParser:
    """Create argument parser from the registered commands."""
    builder = CLIBuilder(description='Golf betting engine: handicap strokes, game results and settlements')
    for command in CommandRegistry.all_commands():
        builder.add_command(command)
    return builder.build()


def _logging_config_path(config_dir: str | None, configured: str | None) -> Path | None:
    if not configured:
        return None
    return resolve_path(configured, get_config_dir(config_dir))


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    logger = get_logger(__name__)
    try:
        settings = ConfigurationManager().load_config(args.config_dir)
    except GolfBetsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    logging_config = load_logging_config(
        _logging_config_path(args.config_dir, settings.logging_config_file)
    )
    logging_config.default_level = settings.log_level
    setup_logging(
        logging_config,
        verbose=args.verbose,
        log_file=args.log_file or settings.log_file,
        json_output=args.json_logs
    )

    command = CommandRegistry.get_command(args.command)
    if command is None:
        logger.error(f"Unknown command: {args.command}")
        return 1

    errors = ArgumentValidator.validate_args(args, command)
    if errors:
        for error in errors:
            logger.error(error)
        return 1

    ctx = CLIContext(args=args, logger=logger, settings=settings, parser=parser)
    try:
        with handle_errors(GolfBetsError, "cli", args.command):
            return command.handler(ctx)
    except GolfBetsError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        get_error_aggregator().flush()


if __name__ == '__main__':
    sys.exit(main())
