"""Application constants.

This module contains magic strings and numbers used throughout the application.
Centralizing these values makes them easier to maintain and modify.
"""

# Week Window
# Weeks start on Sunday (Python weekday() numbers Monday as 0, Sunday as 6)
WEEK_START_WEEKDAY = 6
WEEK_SECONDS = 7 * 24 * 60 * 60

# Timestamps
# Epoch values accepted at the API boundary are milliseconds. Anything below
# this threshold would be a date in early 1973 and is almost certainly seconds.
MIN_EPOCH_MILLIS = 100_000_000_000
# Kiosk clocks may run slightly ahead of the server
MAX_CLOCK_SKEW_SECONDS = 300

# Locations
MAX_LOCATION_ACTIVITIES = 3

# Reward Types
REWARD_TYPE_GLOBAL = "global"
REWARD_TYPE_HOST = "host"
REWARD_TYPE_PET = "pet"
REWARD_TYPES = (REWARD_TYPE_GLOBAL, REWARD_TYPE_HOST, REWARD_TYPE_PET)

# Default rewards created when none of that type exist
DEFAULT_GLOBAL_REWARDS = [
    {"required_count": 8, "name": "Tier 1 Reward", "icon": "checkroom"},
    {"required_count": 30, "name": "Tier 2 Reward", "icon": "dry_cleaning"},
    {"required_count": 60, "name": "Tier 3 Reward", "icon": "emoji_events"},
]
DEFAULT_PET_REWARDS = [
    {"required_count": 8, "name": "Pet Reward", "icon": "pets"},
]

# Default activities created by the bootstrap endpoint
DEFAULT_ACTIVITIES = [
    {"name": "Run", "icon": "directions_run"},
    {"name": "Walk", "icon": "directions_walk"},
    {"name": "Bike", "icon": "directions_bike"},
]

# History windows
DEFAULT_HISTORY_LIMIT = 1000
DEFAULT_ONE_AWAY_WINDOW = 1000
DEFAULT_RECENT_LIMIT = 50

# JWT Token Configuration
# Token expiration time in minutes (8 hours)
ACCESS_TOKEN_EXPIRE_MINUTES = 480
