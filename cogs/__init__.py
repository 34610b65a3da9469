"""Discord command groups for Pickleball Doubles Tracker Bot."""
