"""
Pickletrack: find a nearby bar whose reviews mention picklebacks.

Two halves:
- ``scrape``: offline batch job that enumerates bars from Foursquare, keeps the
  ones with matching tips and publishes a dated JSON snapshot.
- ``catalog`` + ``app``: long-lived web service that serves a distance-weighted
  random pick from the current snapshot.
"""
