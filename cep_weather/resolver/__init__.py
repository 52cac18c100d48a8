"""Resolver service: CEP to city to current temperature."""
