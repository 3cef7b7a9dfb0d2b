"""Runtime configuration for the CHIP-8 driver loop."""

from flax.struct import dataclass, field

from chippy.constants import TIMER_FREQUENCY

UNKNOWN_OPCODE_POLICIES = ("halt", "skip")


@dataclass(frozen=True)
class EmulatorConfig:
    """Driver loop settings.

    Attributes:
        instruction_frequency: CHIP-8 CPU frequency in Hz (typically 700)
        timer_frequency: Delay/sound timer decrement rate in Hz
        on_unknown_opcode: ``"halt"`` to stop, ``"skip"`` to step over the word
        seed: Seed for the random-number instruction
        trace: Log every executed instruction at DEBUG level
    """
    instruction_frequency: int = field(pytree_node=False, default=700)
    timer_frequency: int = field(pytree_node=False, default=TIMER_FREQUENCY)
    on_unknown_opcode: str = field(pytree_node=False, default="halt")
    seed: int = field(pytree_node=False, default=0)
    trace: bool = field(pytree_node=False, default=False)

    @property
    def instructions_per_frame(self) -> int:
        """Number of CHIP-8 instructions to execute per timer tick."""
        return max(1, self.instruction_frequency // self.timer_frequency)

    def validate(self) -> "EmulatorConfig":
        if self.instruction_frequency <= 0:
            raise ValueError(f"instruction_frequency must be positive, got {self.instruction_frequency}")
        if self.timer_frequency <= 0:
            raise ValueError(f"timer_frequency must be positive, got {self.timer_frequency}")
        if self.on_unknown_opcode not in UNKNOWN_OPCODE_POLICIES:
            raise ValueError(
                f"Unsupported on_unknown_opcode '{self.on_unknown_opcode}'. "
                f"Supported policies: {list(UNKNOWN_OPCODE_POLICIES)}"
            )
        return self
