"""Keeps the session awake by nudging the mouse on a schedule."""
