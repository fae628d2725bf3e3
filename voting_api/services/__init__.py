"""
Use cases for the voting services.

Each service module orchestrates entity stores to implement the business
rules of one API (voters with their poll history, polls, votes with their
references). Routers call these services instead of touching the backend.
"""
