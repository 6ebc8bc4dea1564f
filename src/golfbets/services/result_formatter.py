"""
Result formatting for the command line.

Turns game results and settlement reports into JSON-ready dictionaries and
into rows for ``tabulate``.
"""

from typing import Any

from tabulate import tabulate

from golfbets.models.results import (
    BestBallResult,
    GameResult,
    HoleStatus,
    MatchResult,
    NassauResult,
    SegmentResult,
    SkinsResult,
    StablefordResult,
    WolfResult,
)
from golfbets.models.settlement import SettlementReport
from golfbets.services.games.best_ball import format_best_ball_status, format_relative_to_par
from golfbets.services.games.match_play import format_match_status
from golfbets.services.games.nassau import format_segment_status
from golfbets.services.settlement_calculator import format_settlements
from golfbets.utils.money import Money, format_money, quantize

TABLE_FORMAT = "psql"


def _amount(value: Money, places: int = 2) -> str:
    return str(quantize(value, places))


def _segment_to_dict(segment: SegmentResult, places: int) -> dict[str, Any]:
    return {
        "holes": [segment.first_hole, segment.last_hole],
        "status": segment.status.value,
        "winner_id": segment.winner_id,
        "amount": _amount(segment.amount, places),
        "leader_id": segment.leader_id,
        "margin": segment.margin,
        "holes_played": segment.holes_played,
        "totals": dict(segment.totals),
    }


def result_to_dict(result: GameResult, places: int = 2) -> dict[str, Any]:
    """JSON-ready view of a game result."""
    if isinstance(result, SkinsResult):
        return {
            "game": result.game.game_type,
            "holes": {
                str(number): {
                    "status": hole.status.value,
                    "winner_id": hole.winner_id,
                    "skins": hole.skins,
                    "pot": _amount(hole.pot_amount, places),
                }
                for number, hole in result.per_hole.items()
            },
            "totals": {pid: _amount(v, places) for pid, v in result.totals.items()},
            "skins_won": dict(result.skins_won),
            "unclaimed": _amount(result.unclaimed_amount, places),
        }
    if isinstance(result, NassauResult):
        return {
            "game": result.game.game_type,
            "segments": {
                segment.value: _segment_to_dict(value, places)
                for segment, value in result.segments.items()
            },
            "presses": [
                {
                    "id": p.press.id,
                    "start_hole": p.press.start_hole,
                    "initiated_by": p.press.initiated_by,
                    **_segment_to_dict(p.result, places),
                }
                for p in result.press_results
            ],
        }
    if isinstance(result, MatchResult):
        return {
            "game": result.game.game_type,
            "status": result.status.value,
            "winner_id": result.winner_id,
            "leader_id": result.leader_id,
            "holes_up": result.holes_up,
            "holes_played": result.holes_played,
            "holes_remaining": result.holes_remaining,
            "hole_closed_out": result.hole_closed_out,
            "label": result.status_brief,
            "stakes": _amount(result.stakes, places),
        }
    if isinstance(result, WolfResult):
        return {
            "game": result.game.game_type,
            "holes": [
                {
                    "hole_number": h.hole_number,
                    "wolf_id": h.wolf_id,
                    "partner_id": h.partner_id,
                    "blind": h.blind,
                    "outcome": h.outcome.value,
                    "points": h.points,
                }
                for h in result.hole_results
            ],
            "points": {pid: _amount(v, places) for pid, v in result.points.items()},
            "earnings": {pid: _amount(v, places) for pid, v in result.earnings.items()},
            "carry_points": result.carry_points,
        }
    if isinstance(result, StablefordResult):
        return {
            "game": result.game.game_type,
            "modified": result.game.modified,
            "status": result.status.value,
            "winner_id": result.winner_id,
            "holes_complete": result.holes_complete,
            "standings": [
                {
                    "player_id": s.player_id,
                    "position": s.position,
                    "points": s.points,
                    "holes_scored": s.holes_scored,
                }
                for s in result.standings
            ],
        }
    if isinstance(result, BestBallResult):
        return {
            "game": result.game.game_type,
            "status": result.status.value,
            "winner_team_id": result.winner_team_id,
            "match_status": format_best_ball_status(result),
            "standings": [
                {
                    "team_id": s.team.id,
                    "name": s.team.name,
                    "player_ids": list(s.team.player_ids),
                    "total": s.total,
                    "holes_played": s.holes_played,
                    "relative_to_par": s.relative_to_par,
                    "holes_won": s.holes_won,
                    "contributions": dict(s.contributions),
                }
                for s in result.standings
            ],
        }
    raise TypeError(f"Unsupported game result: {type(result).__name__}")


def report_to_dict(report: SettlementReport, places: int = 2) -> dict[str, Any]:
    """JSON-ready view of a settlement report."""
    return {
        "balances": {pid: _amount(v, places) for pid, v in (report.settled_balances or report.balances).items()},
        "breakdown": {
            label: {pid: _amount(v, places) for pid, v in amounts.items()}
            for label, amounts in report.breakdown.items()
        },
        "settlements": [
            {
                "from_player_id": s.from_player_id,
                "to_player_id": s.to_player_id,
                "amount": str(s.amount),
            }
            for s in report.settlements
        ],
    }


def format_result(result: GameResult, names: dict[str, str], places: int = 2) -> str:
    """Text table for a game result."""
    if isinstance(result, SkinsResult):
        rows = []
        for number, hole in sorted(result.per_hole.items()):
            winner = names.get(hole.winner_id, "") if hole.winner_id else ""
            pot = format_money(hole.pot_amount, places) if hole.status is HoleStatus.WON else ""
            rows.append([number, hole.status.value, winner, hole.skins or "", pot])
        table = tabulate(rows, headers=["Hole", "Status", "Winner", "Skins", "Pot"], tablefmt=TABLE_FORMAT)
        totals = ", ".join(f"{names[pid]} {format_money(v, places)}" for pid, v in result.totals.items())
        footer = f"Won: {totals}"
        if result.unclaimed_amount:
            footer += f" | Unclaimed: {format_money(result.unclaimed_amount, places)}"
        return f"Skins\n{table}\n{footer}"
    if isinstance(result, NassauResult):
        rows = [
            [segment.value, value.status.value, format_segment_status(value, names),
             format_money(value.amount, places)]
            for segment, value in result.segments.items()
        ]
        rows.extend(
            [f"press @{p.press.start_hole}", p.result.status.value,
             format_segment_status(p.result, names), format_money(p.result.amount, places)]
            for p in result.press_results
        )
        table = tabulate(rows, headers=["Bet", "Status", "Standing", "Amount"], tablefmt=TABLE_FORMAT)
        return f"Nassau\n{table}"
    if isinstance(result, MatchResult):
        return f"Match play\n{format_match_status(result, names)}"
    if isinstance(result, WolfResult):
        rows = [
            [names[pid], _amount(result.points[pid], places), format_money(result.earnings[pid], places)]
            for pid in result.player_ids
        ]
        table = tabulate(rows, headers=["Player", "Points", "Earnings"], tablefmt=TABLE_FORMAT)
        return f"Wolf\n{table}"
    if isinstance(result, StablefordResult):
        rows = [[s.position, names[s.player_id], s.points, s.holes_scored] for s in result.standings]
        table = tabulate(rows, headers=["Pos", "Player", "Points", "Holes"], tablefmt=TABLE_FORMAT)
        title = "Stableford (modified)" if result.game.modified else "Stableford"
        return f"{title}\n{table}"
    if isinstance(result, BestBallResult):
        rows = [
            [s.team.name, s.total, format_relative_to_par(s.relative_to_par), s.holes_played, s.holes_won]
            for s in result.standings
        ]
        table = tabulate(rows, headers=["Team", "Total", "To par", "Holes", "Won"], tablefmt=TABLE_FORMAT)
        return f"Best ball\n{table}\n{format_best_ball_status(result)}"
    raise TypeError(f"Unsupported game result: {type(result).__name__}")


def format_report(report: SettlementReport, names: dict[str, str], places: int = 2) -> str:
    """Text tables for balances and payments."""
    labels = list(report.breakdown)
    rows = [
        [names.get(pid, pid)]
        + [format_money(report.breakdown[label][pid], places) for label in labels]
        + [format_money(balance, places)]
        for pid, balance in (report.settled_balances or report.balances).items()
    ]
    balances = tabulate(rows, headers=["Player", *labels, "Total"], tablefmt=TABLE_FORMAT)
    if report.settlements:
        payments = "\n".join(format_settlements(report.settlements, names))
    else:
        payments = "No payments needed"
    return f"Balances\n{balances}\n\nSettlements\n{payments}"
