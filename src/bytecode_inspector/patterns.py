"""
Instruction idioms emitted by solc for the function dispatcher and the
OpenZeppelin style delegating proxy.

Code for selecting from n functions without split:
	DUP1, PUSH4 <id_i>, EQ, PUSH2/3 <tag_i>, JUMPI
	PUSH2/3 <fallback>, JUMP

Code for selecting from n functions with split:
	DUP1, PUSH4 <pivot>, GT, PUSH2/3 <tag_less>, JUMPI
	-> SELECT[n/2]
	tag_less:
	-> SELECT[n/2]
"""

from bytecode_inspector.matchers import (
	AnyOf,
	OpExact,
	OpAnyOf,
	PushValue,
	create_pattern,
)

LOG_OPCODES = ("LOG0", "LOG1", "LOG2", "LOG3", "LOG4")

PROXY_PATTERN = create_pattern(
	"delegate_proxy",
	[
		OpExact("CALLDATASIZE"),
		PushValue("0x00"),
		OpExact("DUP1"),
		OpExact("CALLDATACOPY"),
		PushValue("0x00"),
		OpExact("DUP1"),
		OpExact("CALLDATASIZE"),
		PushValue("0x00"),
		OpExact("DUP5"),
		OpExact("GAS"),
		OpExact("DELEGATECALL"),
		OpExact("RETURNDATASIZE"),
		PushValue("0x00"),
		OpExact("DUP1"),
		OpExact("RETURNDATACOPY"),
		OpExact("DUP1"),
		OpExact("DUP1"),
		OpExact("ISZERO"),
		OpExact("PUSH2"),
		OpExact("JUMPI"),
		OpExact("RETURNDATASIZE"),
		PushValue("0x00"),
		OpExact("RETURN"),
		OpExact("JUMPDEST"),
		OpExact("RETURNDATASIZE"),
		PushValue("0x00"),
		OpExact("REVERT"),
	],
)

# calldatasize < 4 guard followed by calldataload(0) >> 0xe0
JUMP_TABLE_PATTERN = create_pattern(
	"jump_table",
	[
		OpExact("PUSH1"),
		OpExact("CALLDATASIZE"),
		OpExact("LT"),
		OpAnyOf("PUSH2", "PUSH3"),
		OpExact("JUMPI"),
		OpAnyOf("PUSH0", "PUSH1"),
		OpExact("CALLDATALOAD"),
		OpExact("PUSH1"),
		OpExact("SHR"),
	],
)

FUNC_SELECTOR_PATTERN = create_pattern(
	"func_selector",
	[
		OpExact("DUP1"),
		OpAnyOf("PUSH3", "PUSH4"),
		OpExact("EQ"),
		OpAnyOf("PUSH2", "PUSH3"),
		OpExact("JUMPI"),
	],
)

SPLIT_SELECTOR_PATTERN = create_pattern(
	"split_selector",
	[
		OpExact("DUP1"),
		OpAnyOf("PUSH3", "PUSH4"),
		OpExact("GT"),
		OpAnyOf("PUSH2", "PUSH3"),
		OpExact("JUMPI"),
	],
)

END_JUMP_TABLE_PATTERN = create_pattern(
	"end_jump_table",
	[
		AnyOf(OpExact("PUSH0"), PushValue("0x00")),
		OpExact("DUP1"),
		OpExact("REVERT"),
	],
)

# Index of the candidate selector push inside the dispatch entry patterns
SELECTOR_PUSH_INDEX = 1
