"""Colors for prchecks output, in Rich markup syntax."""


class Theme:
    SUCCESS = "green"
    WARNING = "yellow"
    ERROR_BOLD = "bold red"
    HEADER = "bold"
    DIM = "grey62"

    # Check table
    CHECK_NAME = "cyan"
    CHECK_TRIGGER = "magenta"
    CHECK_REQUIRED = "bold"
    CHECK_OPTIONAL = "grey62"

    # Gate state, keyed off GateState in the gate command
    GATE_SUCCESS = "bold green"
    GATE_FAILURE = "bold red"
    GATE_PENDING = "bold yellow"


theme = Theme()
