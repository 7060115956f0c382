"""Recognition adapters and platform integrations."""
