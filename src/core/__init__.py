"""Core domain package for wordlescope.

Core contains result recognition, scoring, statistics, leaderboards and
tournament logic without any Telegram or storage-specific code, keeping the
business logic portable.
"""
