"""Wordle leaderboard built from recap messages in chat history."""
