"""
Quark, operator and correlator descriptors as written in the infile.

Descriptor strings are compact ':'-separated records:

    quark           = u:5:TB:2:EI:6:DF:4:/path/to/perambulators
    operator_list   = g5.d0.p0,1:g4.d(0,0,1).p(0,0,1)
    correlator_list = C2+:Q0:Op0:Q0:Op0

The functions here translate them into dataclasses; malformed input raises
ConfigurationError.
"""

import itertools
from dataclasses import dataclass, field
from typing import List, Tuple

from ..config import (
    QUARK_FLAVORS, DILUTION_T_TYPES, DILUTION_E_TYPES, DILUTION_D_TYPES,
    MAX_DILUTION_D, QUARK_DESCRIPTOR_FIELDS,
    DEFAULT_START_CONFIG, DEFAULT_OUTPUT_PATH, DEFAULT_OVERWRITE,
    ZERO_VECTOR, Momentum,
)
from ..errors import ConfigurationError


# =============================================================================
# Descriptor types
# =============================================================================

@dataclass
class Quark:
    """
    One quark species with its stochastic estimation parameters.

    Attributes
    ----------
    flavor : str
        Flavor letter, one of u, d, s, c.
    number_of_rnd_vec : int
        Number of independent random vectors (noise sources).
    dilution_T, dilution_E, dilution_D : str
        Dilution scheme in time, eigenvector and Dirac space.
    number_of_dilution_T, number_of_dilution_E, number_of_dilution_D : int
        Number of dilution blocks in each space.
    path : str
        Directory holding perambulators and random vectors.
    id : int
        Position in the declaration order of the infile.
    """
    flavor: str
    number_of_rnd_vec: int
    dilution_T: str
    number_of_dilution_T: int
    dilution_E: str
    number_of_dilution_E: int
    dilution_D: str
    number_of_dilution_D: int
    path: str
    id: int = 0

    def summary(self) -> str:
        """Human-readable multi-line description."""
        return (
            f"\tQUARK type: ****  {self.flavor}  ****\n"
            f"\t number of random vectors: {self.number_of_rnd_vec}\n"
            f"\t dilution scheme in time: "
            f"{self.dilution_T}{self.number_of_dilution_T}\n"
            f"\t dilution scheme in ev space: "
            f"{self.dilution_E}{self.number_of_dilution_E}\n"
            f"\t dilution scheme in Dirac space: "
            f"{self.dilution_D}{self.number_of_dilution_D}\n"
            f"\t path of the perambulator and random vectors:\n\t\t{self.path}"
        )


@dataclass
class Operator:
    """
    One field operator entry of an operator group.

    ``momenta`` is a list of momentum lists: an explicit momentum gives one
    list with one vector, each momentum shell |p|^2 = n gives one list with
    all vectors on that shell.
    """
    gammas: List[int]
    displacement: Momentum
    momenta: List[List[Momentum]]


OperatorGroup = List[Operator]


@dataclass
class Correlator:
    """
    A requested correlation function.

    Attributes
    ----------
    type : str
        Diagram tag, e.g. ``"C2+"``. Validated only when the lookup tables
        are built.
    operator_numbers : list of int
        Operator group per leg.
    quark_numbers : list of int
        Quark id per propagator.
    """
    type: str
    operator_numbers: List[int] = field(default_factory=list)
    quark_numbers: List[int] = field(default_factory=list)


@dataclass
class GlobalData:
    """
    Everything one run needs to build its lookup tables.

    Constructed once by the caller (usually from an infile) and passed
    explicitly to ``lookup.builder.init_lookup_tables``.
    """
    quarks: List[Quark] = field(default_factory=list)
    operator_list: List[OperatorGroup] = field(default_factory=list)
    correlator_list: List[Correlator] = field(default_factory=list)
    start_config: int = DEFAULT_START_CONFIG
    path_output: str = DEFAULT_OUTPUT_PATH
    overwrite: str = DEFAULT_OVERWRITE
    verbose: bool = False

    def quark_types(self, correlator: Correlator) -> List[str]:
        """Flavor letters of the quarks used by ``correlator``."""
        return [self.quarks[q].flavor for q in correlator.quark_numbers]


# =============================================================================
# Helpers
# =============================================================================

def _to_int(token: str, what: str) -> int:
    try:
        return int(token)
    except ValueError:
        raise ConfigurationError(f"Cannot read {what} from '{token}'") from None


def create_3darray_from_string(token: str) -> Momentum:
    """
    Parse ``x(a,b,c)`` into the 3-vector (a, b, c).

    The leading letter and the parentheses are stripped.

    Examples
    --------
    >>> create_3darray_from_string("p(0,-1,1)")
    (0, -1, 1)
    """
    inner = token[2:-1]
    parts = inner.split(",")
    if len(parts) != 3 or not token.endswith(")"):
        raise ConfigurationError(f"Expected a 3-vector like p(0,0,1), got '{token}'")
    return tuple(_to_int(p, "3-vector component") for p in parts)


def create_all_momentum_combinations(p: int) -> List[Momentum]:
    """
    All integer 3-momenta with |p|^2 equal to ``p``.

    Components run from -p to p with x slowest and z fastest.

    Examples
    --------
    >>> create_all_momentum_combinations(1)
    [(-1, 0, 0), (0, -1, 0), (0, 0, -1), (0, 0, 1), (0, 1, 0), (1, 0, 0)]
    """
    components = range(-p, p + 1)
    return [
        vec for vec in itertools.product(components, repeat=3)
        if vec[0] * vec[0] + vec[1] * vec[1] + vec[2] * vec[2] == p
    ]


def create_mom_array_from_string(token: str) -> List[List[Momentum]]:
    """Parse ``p0,1,2`` into one momentum shell per listed |p|^2."""
    return [
        create_all_momentum_combinations(_to_int(t, "momentum shell"))
        for t in token[1:].split(",")
    ]


# =============================================================================
# Quarks
# =============================================================================

def make_quark(quark_string: str) -> Quark:
    """
    Build a Quark from its infile descriptor.

    Parameters
    ----------
    quark_string : str
        ``flavor:nb_rnd_vec:dilT_type:dilT:dilE_type:dilE:dilD_type:dilD:path``

    Returns
    -------
    Quark
        The unchecked quark; validate it with ``quark_check``.

    Raises
    ------
    ConfigurationError
        If the string does not have exactly 9 fields or a count is not an
        integer.
    """
    tokens = quark_string.strip().split(":")
    if len(tokens) != QUARK_DESCRIPTOR_FIELDS:
        raise ConfigurationError(
            f"Invalid value for quarks.quark: '{quark_string}'"
        )

    return Quark(
        flavor=tokens[0],
        number_of_rnd_vec=_to_int(tokens[1], "number of random vectors"),
        dilution_T=tokens[2],
        number_of_dilution_T=_to_int(tokens[3], "time dilution blocks"),
        dilution_E=tokens[4],
        number_of_dilution_E=_to_int(tokens[5], "eigenvector dilution blocks"),
        dilution_D=tokens[6],
        number_of_dilution_D=_to_int(tokens[7], "Dirac dilution blocks"),
        path=tokens[8],
    )


def quark_check(quark: Quark, verbose: bool = False) -> None:
    """
    Validate a quark descriptor.

    Raises
    ------
    ConfigurationError
        With the message of the first violated rule.
    """
    if quark.flavor not in QUARK_FLAVORS:
        raise ConfigurationError("quarks.quark.type must be u, d, s or c")
    if quark.number_of_rnd_vec < 1:
        raise ConfigurationError(
            "quarks.quark.number_of_rnd_vec must be greater than 0"
        )
    if quark.dilution_T not in DILUTION_T_TYPES:
        raise ConfigurationError("quarks.quark.dilution_T must be TI, TB, TF")
    if quark.number_of_dilution_T < 1:
        raise ConfigurationError(
            "quarks.quark.number_of_dilution_T must be greater than 0 "
            "and smaller than the temporal extend"
        )
    if quark.dilution_E not in DILUTION_E_TYPES:
        raise ConfigurationError("quarks.quark.dilution_E must be EI, EB or EF")
    if quark.number_of_dilution_E < 1:
        raise ConfigurationError(
            "quarks.quark.number_of_dilution_E must be greater than 0 "
            "and smaller than number of eigen vectors"
        )
    if quark.dilution_D not in DILUTION_D_TYPES:
        raise ConfigurationError("quarks.quark.dilution_D must be DI, DB or DF")
    if not 1 <= quark.number_of_dilution_D <= MAX_DILUTION_D:
        raise ConfigurationError(
            "quarks.quark.number_of_dilution_D must be greater than 0 "
            "and smaller than 5"
        )

    if verbose:
        print(quark.summary())


# =============================================================================
# Operators
# =============================================================================

def make_operator(operator_string: str) -> Operator:
    """
    Parse one operator, e.g. ``g5.d0.p0,1`` or ``g4.d(0,0,1).p(0,0,1)``.

    Parts are separated by '.':

    - ``g<int>``: gamma structure, may appear several times
    - ``d0`` or ``d(x,y,z)``: displacement
    - ``p(x,y,z)``: one explicit momentum
    - ``p<n>[,<m>...]``: all momenta on the shells |p|^2 = n, m, ...
    """
    gammas = []
    displacement = ZERO_VECTOR
    momenta = []

    for part in operator_string.split("."):
        if part.startswith("g"):
            gammas.append(_to_int(part[1:], "gamma structure"))
        elif part.startswith("d"):
            if part[1:2] == "0":
                displacement = ZERO_VECTOR
            elif part[1:2] == "(":
                displacement = create_3darray_from_string(part)
            else:
                raise ConfigurationError(
                    "Something wrong with the displacement in the operator "
                    f"definition: '{part}'"
                )
        elif part.startswith("p"):
            if part[1:2] == "(":
                momenta = [[create_3darray_from_string(part)]]
            else:
                momenta = create_mom_array_from_string(part)
        else:
            raise ConfigurationError(
                f"there is something wrong with the operators: '{part}'"
            )

    return Operator(gammas=gammas, displacement=displacement, momenta=momenta)


def make_operator_list(operator_string: str) -> OperatorGroup:
    """
    Parse a ':'-separated list of operators into one operator group.

    Examples
    --------
    >>> group = make_operator_list("g5.d0.p(0,0,1):g4.d0.p(0,0,1)")
    >>> [op.gammas for op in group]
    [[5], [4]]
    """
    return [make_operator(op) for op in operator_string.strip().split(":")]


# =============================================================================
# Correlators
# =============================================================================

def make_correlator(correlator_string: str) -> Correlator:
    """
    Parse a correlator descriptor like ``C2+:Q0:Op0:Q1:Op1``.

    The first field is the diagram tag; ``Q<n>`` fields name quarks and
    ``Op<n>`` fields operator groups, each kept in order of appearance.
    """
    tokens = correlator_string.strip().split(":")
    correlator = Correlator(type=tokens[0])

    for token in tokens[1:]:
        if token.startswith("Op"):
            correlator.operator_numbers.append(_to_int(token[2:], "operator number"))
        elif token.startswith("Q"):
            correlator.quark_numbers.append(_to_int(token[1:], "quark number"))
        else:
            raise ConfigurationError(
                f"there is something wrong with the correlators: '{token}'"
            )

    return correlator
