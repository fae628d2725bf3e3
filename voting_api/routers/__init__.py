"""
FastAPI routers grouped by entity (voters, polls, votes) plus the health and
fault-injection endpoints every service exposes.

Each module exposes an APIRouter that ``voting_api.app.create_app`` includes in
the application of the matching service.
"""
