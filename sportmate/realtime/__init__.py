"""Live chat channel: room presence, message fan-out and the websocket gateway."""
