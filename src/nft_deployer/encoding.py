"""ABI encoding of constructor and function call data."""

from typing import Any, Dict, List, Optional, Sequence

from eth_abi import encode
from eth_utils import function_abi_to_4byte_selector
from eth_utils.abi import collapse_if_tuple


def _input_types(abi_item: Optional[Dict[str, Any]]) -> List[str]:
    if abi_item is None:
        return []
    return [collapse_if_tuple(i) for i in abi_item.get("inputs", [])]


def _find(abi: Sequence[Dict[str, Any]], item_type: str, name: Optional[str] = None) -> Optional[Dict[str, Any]]:
    for item in abi:
        if item.get("type", "function") != item_type:
            continue
        if name is None or item.get("name") == name:
            return item
    return None


def encode_deploy_data(abi: Sequence[Dict[str, Any]], bytecode: str, args: Sequence[Any]) -> str:
    """
    Build contract-creation call data: bytecode followed by encoded constructor args.

    Args:
        abi: Contract ABI
        bytecode: 0x-prefixed creation bytecode
        args: Constructor arguments in ABI order

    Returns:
        0x-prefixed hex call data

    Raises:
        ValueError: If args do not match the constructor's inputs
    """
    types = _input_types(_find(abi, "constructor"))
    if len(types) != len(args):
        raise ValueError(f"Constructor expects {len(types)} arguments, got {len(args)}")
    if not types:
        return bytecode
    return bytecode + encode(types, list(args)).hex()


def encode_function_call(abi: Sequence[Dict[str, Any]], name: str, args: Sequence[Any]) -> str:
    """
    Build call data for a contract function: 4-byte selector plus encoded args.

    Raises:
        ValueError: If the function is not in the ABI or args do not match
    """
    function_abi = _find(abi, "function", name)
    if function_abi is None:
        raise ValueError(f"Function '{name}' not found in contract ABI")
    types = _input_types(function_abi)
    if len(types) != len(args):
        raise ValueError(f"Function '{name}' expects {len(types)} arguments, got {len(args)}")
    selector = function_abi_to_4byte_selector(function_abi)
    return "0x" + selector.hex() + encode(types, list(args)).hex()
