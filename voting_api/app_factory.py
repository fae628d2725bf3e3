"""Entry points for the voters, polls and votes FastAPI apps.

    uvicorn voting_api.app_factory:voters_app --port 1080
"""
from voting_api.app import create_app

voters_app = create_app("voters")
polls_app = create_app("polls")
votes_app = create_app("votes")

__all__ = ["voters_app", "polls_app", "votes_app", "create_app"]
