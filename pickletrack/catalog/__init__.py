"""
Serving side: the in-memory bar catalog and the proximity scorer behind /locate.
"""
