"""CEP request parsing, identical on both hops."""
import re
from dataclasses import dataclass

from .errors import InvalidZipcode, MalformedRequest

CEP_PATTERN = re.compile(r"[0-9]{8}")


@dataclass(frozen=True)
class CepRequest:
    cep: str

    def to_json(self):
        return {"cep": self.cep}


def is_valid_cep(cep) -> bool:
    """True only for exactly eight ASCII digits."""
    return isinstance(cep, str) and CEP_PATTERN.fullmatch(cep) is not None


def read_cep_request(payload) -> CepRequest:
    """Turns a decoded JSON body into a CepRequest or raises the matching error."""
    if not isinstance(payload, dict):
        raise MalformedRequest("body is not a JSON object")
    cep = payload.get("cep", "")
    if not isinstance(cep, str):
        raise MalformedRequest(f"cep must be a string, got {type(cep).__name__}")
    if not is_valid_cep(cep):
        raise InvalidZipcode(f"rejected cep {cep!r}")
    return CepRequest(cep=cep)
