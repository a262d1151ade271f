"""
Offline scrape of pickleback bars from Foursquare.

Responsibilities:
- Enumerate every bar in the target region despite the per-query result cap.
- Keep the ones whose tips mention picklebacks.
- Publish a dated JSON snapshot and repoint ``current.json`` at it.
"""
