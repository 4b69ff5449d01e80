"""Services layer for SteamHub.

Services implement business logic and orchestrate data operations.
Organized by feature:
- review: Status transitions, history, review workflow
- publisher: Drive to YouTube streaming publication
"""
