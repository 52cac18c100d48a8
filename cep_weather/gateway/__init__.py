"""Gateway service: validates the CEP and relays the resolver's answer."""
