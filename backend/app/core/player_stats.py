"""Player Stats: pure computation of a player's record across completed games.

Invariants:
    - Inputs are CompletedSeating snapshots (no IO, no DB); in-progress games never count
    - Empty history yields zeros, never a division error
    - best_score is the LOWEST game total (lower is better in dominoes)
"""

from app.core.match_records import CompletedSeating


def compute_player_stats(seatings: list[CompletedSeating]) -> dict:
    """Summary statistics for one player. Pure, no IO."""
    games_played = len(seatings)
    games_won = sum(1 for s in seatings if s.is_winner)
    total_score = sum(s.total_score for s in seatings)

    return {
        "games_played": games_played,
        "games_won": games_won,
        "total_score": total_score,
        "average_score_per_game": (
            total_score / games_played if games_played else 0.0
        ),
        "best_score": min((s.total_score for s in seatings), default=0),
        "win_rate": games_won / games_played if games_played else 0.0,
    }
