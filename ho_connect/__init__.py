"""HO Connect notification, mention and presence core."""
