"""
CEP weather services.
A gateway that validates Brazilian postal codes (CEP) and a resolver that turns
them into the current temperature of the matching city.
"""

__version__ = "1.0.0"
