from typing import Any, Dict, List
from pydantic import BaseModel, ConfigDict

class _PassThrough(BaseModel):
    # only the fields we read are declared; the rest of the payload rides along
    model_config = ConfigDict(extra="allow")

class NamedResource(BaseModel):
    name: str
    url: str = ""

class PokemonMove(_PassThrough):
    move: NamedResource

class Pokemon(_PassThrough):
    id: int
    name: str
    moves: List[PokemonMove] = []

    def payload(self) -> Dict[str, Any]:
        """The upstream JSON object as received."""
        return self.model_dump(mode="json")

class NameIndexPage(_PassThrough):
    results: List[NamedResource]

    def names(self) -> List[str]:
        return [r.name for r in self.results]

class Move(_PassThrough):
    name: str
    type: NamedResource
