"""Trailblazers: weekly check-ins and rewards for athletes visiting host locations."""
