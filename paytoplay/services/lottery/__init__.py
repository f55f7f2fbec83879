"""Lottery domain services: fees, draws, game lifecycle and payouts.

This package holds the game rules. HTTP routes and socket handlers import
from here and only translate requests and errors, keeping transport
concerns separated from the lottery mechanics.
"""
