"""
CyberMaker Services Package - Business workflows behind the HTTP API

Core Services:
- account_service & confirmation_service: Registration, email confirmation, login
- challenge_service: Challenge posting and the submission points-award transaction
- ranking_service: Leaderboard and manual score adjustments
- idea_service, journal_service, community_service: User content and its points
- contact_service: Recruiter messages to users
- profile_service: Aggregated public profiles
- email: Pluggable email senders (console, SMTP)
"""
