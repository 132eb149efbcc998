"""Shared constants.

Keeps the unit conversions and formula bounds used by the tracking and
derivation code in one place.
"""

# Mean Earth radius used by the haversine distance (km)
EARTH_RADIUS_KM = 6371.0

# One statute mile in kilometers
MILE_KM = 1.609344

# Brzycki: 1RM = weight * 36 / (37 - reps); undefined at 37 reps
BRZYCKI_NUMERATOR = 36.0
BRZYCKI_DENOMINATOR_BASE = 37.0
BRZYCKI_MIN_REPS = 1
BRZYCKI_MAX_REPS = 36

LOCATION_DENIED_MESSAGE = "Location access denied"
