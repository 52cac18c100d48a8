"""Pieces shared by the gateway and the resolver."""
