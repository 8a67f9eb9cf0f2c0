"""
AnxietyJournal - Personal Anxiety Tracking Journal

A self-hosted Python system for logging anxiety levels,
their triggers and short notes, and reviewing the trend.

Everything stays on this machine. Nothing is synced.
"""

__version__ = "0.1.0"
