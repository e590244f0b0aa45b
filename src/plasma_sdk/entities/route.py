"""Validated paths through a sequence of pairs."""
from typing import List, Optional, Sequence

from ..amounts.price import Price
from ..errors import ChainMismatchError, InvalidPathError
from .currency import Currency, Token
from .pair import Pair


class Route:
    """
    An ordered, contiguous list of pairs from an input to an output currency.

    A native input or output currency is routed through the chain's
    wrapped-native token. `path` holds the tokens visited, one more than the
    number of pairs.
    """

    def __init__(self, pairs: Sequence[Pair], input: Currency, output: Optional[Currency] = None):
        if not pairs:
            raise InvalidPathError("PAIRS: a route needs at least one pair")
        chain_id = pairs[0].chain_id
        if any(pair.chain_id != chain_id for pair in pairs):
            raise ChainMismatchError("CHAIN_IDS: all pairs must be on one chain", chain_id=chain_id)
        if input.chain_id != chain_id:
            raise ChainMismatchError("CHAIN_IDS: input is on another chain", chain_id=input.chain_id)

        wrapped_input = input.wrapped()
        if not pairs[0].involves_token(wrapped_input):
            raise InvalidPathError("INPUT: first pair does not involve the input currency",
                                   input=wrapped_input.address)
        if output is not None and not pairs[-1].involves_token(output.wrapped()):
            raise InvalidPathError("OUTPUT: last pair does not involve the output currency",
                                   output=output.wrapped().address)

        path: List[Token] = [wrapped_input]
        for i, pair in enumerate(pairs):
            current_input = path[i]
            if not pair.involves_token(current_input):
                raise InvalidPathError("PATH: pairs are not contiguous", hop=i, token=current_input.address)
            path.append(pair.other_token(current_input))

        self.pairs: List[Pair] = list(pairs)
        self.path: List[Token] = path
        self.input: Currency = input
        self.output: Currency = output if output is not None else path[-1]
        self.mid_price: Price = Price.from_route(self)

    @property
    def chain_id(self) -> int:
        return self.pairs[0].chain_id

    @property
    def hops(self) -> int:
        return len(self.pairs)

    def __repr__(self) -> str:
        return "Route(" + " -> ".join(token.symbol or token.address for token in self.path) + ")"
