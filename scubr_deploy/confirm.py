from typing import Any, List, Sequence

from ape.utils import ZERO_ADDRESS


def _ask(question: str) -> None:
    """Aborts the whole run when the operator answers N."""
    answer = input(f"{question} Y/N? ")
    if answer.lower().strip() == "n":
        print("Aborting deployment!")
        exit(-1)


def confirm_start() -> None:
    _ask("Continue")


def confirm_deployment(contract_name: str, abi_inputs: List[Any], args: Sequence[Any]) -> None:
    """Shows the constructor arguments of a contract and asks to deploy it."""
    if not args:
        print(f"\n(i) No constructor arguments for {contract_name}")
    else:
        print(f"\nConstructor arguments for {contract_name}")
        for position, (abi_input, arg) in enumerate(zip(abi_inputs, args)):
            label = abi_input.name or f"#{position}"
            print(f"\t{label} ({abi_input.type})={arg}")

    _ask(f"Deploy {contract_name}")
    if ZERO_ADDRESS in args:
        _ask("Zero address given as a constructor argument; continue")
