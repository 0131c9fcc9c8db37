"""Rules applied when a game ends: achievement unlocks, currency payouts and
leaderboard shaping. Nothing here touches the request or the database."""
