"""
Synthetic bytecode built from mnemonics, so every test states the exact
instruction layout it exercises.
"""

from bytecode_inspector.opcodes import OPCODE_NAMES


def assemble(*instructions: str) -> bytes:
	output = b""
	for instruction in instructions:
		name, *operand = instruction.split()
		output += bytes([OPCODE_NAMES[name]])
		if len(operand) > 0:
			output += bytes.fromhex(operand[0].replace("0x", ""))
	return output


def mutate(bytecode: bytes, index: int, value: int) -> bytes:
	return bytecode[:index] + bytes([value]) + bytecode[index + 1 :]


JUMP_TABLE_PROLOGUE = [
	"PUSH1 0x04",
	"CALLDATASIZE",
	"LT",
	"PUSH2 0x00a0",
	"JUMPI",
	"PUSH1 0x00",
	"CALLDATALOAD",
	"PUSH1 0xe0",
	"SHR",
]

# Shanghai and later solc loads calldata offset zero with PUSH0
JUMP_TABLE_PROLOGUE_PUSH0 = [
	"PUSH1 0x04",
	"CALLDATASIZE",
	"LT",
	"PUSH2 0x00a0",
	"JUMPI",
	"PUSH0",
	"CALLDATALOAD",
	"PUSH1 0xe0",
	"SHR",
]

JUMP_TABLE_END = [
	"JUMPDEST",
	"PUSH1 0x00",
	"DUP1",
	"REVERT",
]

NON_PAYABLE_CHECK = [
	"PUSH1 0x80",
	"PUSH1 0x40",
	"MSTORE",
	"CALLVALUE",
	"DUP1",
	"ISZERO",
	"PUSH2 0x0010",
	"JUMPI",
	"PUSH1 0x00",
	"DUP1",
	"REVERT",
	"JUMPDEST",
	"POP",
]


def selector_entry(selector: str, target="0x00b0"):
	push = "PUSH3" if len(selector.replace("0x", "")) == 6 else "PUSH4"
	return ["DUP1", f"{push} {selector}", "EQ", f"PUSH2 {target}", "JUMPI"]


def split_entry(pivot: str, target="0x00c0"):
	return ["DUP1", f"PUSH4 {pivot}", "GT", f"PUSH2 {target}", "JUMPI"]


def dispatch_table(selectors, prologue=JUMP_TABLE_PROLOGUE, padding=[]):
	instructions = list(prologue)
	for selector in selectors:
		instructions += selector_entry(selector)
		instructions += padding
	instructions += JUMP_TABLE_END
	return assemble(*instructions)


PROXY_TEMPLATE = [
	"CALLDATASIZE",
	"PUSH1 0x00",
	"DUP1",
	"CALLDATACOPY",
	"PUSH1 0x00",
	"DUP1",
	"CALLDATASIZE",
	"PUSH1 0x00",
	"DUP5",
	"GAS",
	"DELEGATECALL",
	"RETURNDATASIZE",
	"PUSH1 0x00",
	"DUP1",
	"RETURNDATACOPY",
	"DUP1",
	"DUP1",
	"ISZERO",
	"PUSH2 0x0123",
	"JUMPI",
	"RETURNDATASIZE",
	"PUSH1 0x00",
	"RETURN",
	"JUMPDEST",
	"RETURNDATASIZE",
	"PUSH1 0x00",
	"REVERT",
]

# Loads the implementation slot and forwards into the template
PROXY_PREAMBLE = [
	"PUSH1 0x80",
	"PUSH1 0x40",
	"MSTORE",
	"PUSH1 0x01",
	"SLOAD",
	"JUMPDEST",
]

MINIMAL_PROXY = assemble(*PROXY_TEMPLATE)
PROXY = assemble(*PROXY_PREAMBLE, *PROXY_TEMPLATE)

# {"solc": 0x00081a} with its two byte length suffix
SOLC_METADATA = bytes.fromhex("a164736f6c634300081a000a")
