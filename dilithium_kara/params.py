"""Parameter sets and derived sizes for the Dilithium signature scheme."""

from __future__ import annotations

from dataclasses import dataclass

SEEDBYTES = 32
CRHBYTES = 64
N = 256
Q = 8380417
D = 13
ROOT_OF_UNITY = 1753

POLYT1_PACKEDBYTES = 320
POLYT0_PACKEDBYTES = 416


@dataclass(frozen=True)
class Params:
    """One Dilithium parameter set together with its encoded sizes."""

    mode: int
    name: str
    k: int
    l: int  # noqa: E741
    eta: int
    tau: int
    beta: int
    gamma1: int
    gamma2: int
    omega: int
    polyz_packedbytes: int
    polyw1_packedbytes: int
    polyeta_packedbytes: int

    @property
    def polyvech_packedbytes(self) -> int:
        return self.omega + self.k

    @property
    def public_key_bytes(self) -> int:
        return SEEDBYTES + self.k * POLYT1_PACKEDBYTES

    @property
    def secret_key_bytes(self) -> int:
        return (
            3 * SEEDBYTES
            + self.l * self.polyeta_packedbytes
            + self.k * self.polyeta_packedbytes
            + self.k * POLYT0_PACKEDBYTES
        )

    @property
    def signature_bytes(self) -> int:
        return SEEDBYTES + self.l * self.polyz_packedbytes + self.polyvech_packedbytes


_PARAMETER_SETS = {
    2: Params(
        mode=2,
        name="Dilithium2",
        k=4,
        l=4,
        eta=2,
        tau=39,
        beta=78,
        gamma1=1 << 17,
        gamma2=(Q - 1) // 88,
        omega=80,
        polyz_packedbytes=576,
        polyw1_packedbytes=192,
        polyeta_packedbytes=96,
    ),
    3: Params(
        mode=3,
        name="Dilithium3",
        k=6,
        l=5,
        eta=4,
        tau=49,
        beta=196,
        gamma1=1 << 19,
        gamma2=(Q - 1) // 32,
        omega=55,
        polyz_packedbytes=640,
        polyw1_packedbytes=128,
        polyeta_packedbytes=128,
    ),
    5: Params(
        mode=5,
        name="Dilithium5",
        k=8,
        l=7,
        eta=2,
        tau=60,
        beta=120,
        gamma1=1 << 19,
        gamma2=(Q - 1) // 32,
        omega=75,
        polyz_packedbytes=640,
        polyw1_packedbytes=128,
        polyeta_packedbytes=96,
    ),
}


def params_for(mode: int = 2) -> Params:
    """Return the parameter set for security mode 2, 3 or 5."""
    try:
        return _PARAMETER_SETS[mode]
    except (KeyError, TypeError):
        raise ValueError(f"unsupported Dilithium mode: {mode!r}") from None