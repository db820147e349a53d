from dataclasses import dataclass
from typing import Iterator, List, Union

BytecodeInput = Union[bytes, bytearray, str]


@dataclass(frozen=True)
class Opcode:
	name: str
	opcode: int
	inputs: int
	outputs: int
	pc: int

	@property
	def data(self) -> bytes:
		return b""

	@property
	def size(self):
		return 1 + len(self.data)

	@property
	def is_push_opcode(self):
		return False

	def raw(self) -> bytes:
		return bytes([self.opcode]) + self.data

	def __str__(self):
		return self.name

	def __repr__(self):
		return f"{self.pc:05x}: {self.name}"


@dataclass(frozen=True)
class PushOpcode(Opcode):
	# Shorter than the push width when the bytecode ends mid-push
	operand: bytes = b""

	@property
	def data(self) -> bytes:
		return self.operand

	@property
	def is_push_opcode(self):
		return True

	@property
	def is_truncated(self):
		return len(self.operand) < self.opcode - PUSH0_OPCODE

	def value(self):
		return int.from_bytes(self.operand, byteorder="big")

	def __repr__(self):
		return f"{self.pc:05x}: {self.name} 0x{self.operand.hex()}"


def build_opcodes_table():
	opcodes = {
		0x00: {"name": "STOP", "inputs": 0, "outputs": 0},
		0x01: {"name": "ADD", "inputs": 2, "outputs": 1},
		0x02: {"name": "MUL", "inputs": 2, "outputs": 1},
		0x03: {"name": "SUB", "inputs": 2, "outputs": 1},
		0x04: {"name": "DIV", "inputs": 2, "outputs": 1},
		0x05: {"name": "SDIV", "inputs": 2, "outputs": 1},
		0x06: {"name": "MOD", "inputs": 2, "outputs": 1},
		0x07: {"name": "SMOD", "inputs": 2, "outputs": 1},
		0x08: {"name": "ADDMOD", "inputs": 3, "outputs": 1},
		0x09: {"name": "MULMOD", "inputs": 3, "outputs": 1},
		0x0A: {"name": "EXP", "inputs": 2, "outputs": 1},
		0x0B: {"name": "SIGNEXTEND", "inputs": 2, "outputs": 1},
		0x10: {"name": "LT", "inputs": 2, "outputs": 1},
		0x11: {"name": "GT", "inputs": 2, "outputs": 1},
		0x12: {"name": "SLT", "inputs": 2, "outputs": 1},
		0x13: {"name": "SGT", "inputs": 2, "outputs": 1},
		0x14: {"name": "EQ", "inputs": 2, "outputs": 1},
		0x15: {"name": "ISZERO", "inputs": 1, "outputs": 1},
		0x16: {"name": "AND", "inputs": 2, "outputs": 1},
		0x17: {"name": "OR", "inputs": 2, "outputs": 1},
		0x18: {"name": "XOR", "inputs": 2, "outputs": 1},
		0x19: {"name": "NOT", "inputs": 1, "outputs": 1},
		0x1A: {"name": "BYTE", "inputs": 2, "outputs": 1},
		0x1B: {"name": "SHL", "inputs": 2, "outputs": 1},
		0x1C: {"name": "SHR", "inputs": 2, "outputs": 1},
		0x1D: {"name": "SAR", "inputs": 2, "outputs": 1},
		0x20: {"name": "SHA3", "inputs": 2, "outputs": 1},
		0x30: {"name": "ADDRESS", "inputs": 0, "outputs": 1},
		0x31: {"name": "BALANCE", "inputs": 1, "outputs": 1},
		0x32: {"name": "ORIGIN", "inputs": 0, "outputs": 1},
		0x33: {"name": "CALLER", "inputs": 0, "outputs": 1},
		0x34: {"name": "CALLVALUE", "inputs": 0, "outputs": 1},
		0x35: {"name": "CALLDATALOAD", "inputs": 1, "outputs": 1},
		0x36: {"name": "CALLDATASIZE", "inputs": 0, "outputs": 1},
		0x37: {"name": "CALLDATACOPY", "inputs": 3, "outputs": 0},
		0x38: {"name": "CODESIZE", "inputs": 0, "outputs": 1},
		0x39: {"name": "CODECOPY", "inputs": 3, "outputs": 0},
		0x3A: {"name": "GASPRICE", "inputs": 0, "outputs": 1},
		0x3B: {"name": "EXTCODESIZE", "inputs": 1, "outputs": 1},
		0x3C: {"name": "EXTCODECOPY", "inputs": 4, "outputs": 0},
		0x3D: {"name": "RETURNDATASIZE", "inputs": 0, "outputs": 1},
		0x3E: {"name": "RETURNDATACOPY", "inputs": 3, "outputs": 0},
		0x3F: {"name": "EXTCODEHASH", "inputs": 1, "outputs": 1},
		0x40: {"name": "BLOCKHASH", "inputs": 1, "outputs": 1},
		0x41: {"name": "COINBASE", "inputs": 0, "outputs": 1},
		0x42: {"name": "TIMESTAMP", "inputs": 0, "outputs": 1},
		0x43: {"name": "NUMBER", "inputs": 0, "outputs": 1},
		0x44: {"name": "PREVRANDAO", "inputs": 0, "outputs": 1},
		0x45: {"name": "GASLIMIT", "inputs": 0, "outputs": 1},
		0x46: {"name": "CHAINID", "inputs": 0, "outputs": 1},
		0x47: {"name": "SELFBALANCE", "inputs": 0, "outputs": 1},
		0x48: {"name": "BASEFEE", "inputs": 0, "outputs": 1},
		0x49: {"name": "BLOBHASH", "inputs": 1, "outputs": 1},
		0x4A: {"name": "BLOBBASEFEE", "inputs": 0, "outputs": 1},
		0x50: {"name": "POP", "inputs": 1, "outputs": 0},
		0x51: {"name": "MLOAD", "inputs": 1, "outputs": 1},
		0x52: {"name": "MSTORE", "inputs": 2, "outputs": 0},
		0x53: {"name": "MSTORE8", "inputs": 2, "outputs": 0},
		0x54: {"name": "SLOAD", "inputs": 1, "outputs": 1},
		0x55: {"name": "SSTORE", "inputs": 2, "outputs": 0},
		0x56: {"name": "JUMP", "inputs": 1, "outputs": 0},
		0x57: {"name": "JUMPI", "inputs": 2, "outputs": 0},
		0x58: {"name": "PC", "inputs": 0, "outputs": 1},
		0x59: {"name": "MSIZE", "inputs": 0, "outputs": 1},
		0x5A: {"name": "GAS", "inputs": 0, "outputs": 1},
		0x5B: {"name": "JUMPDEST", "inputs": 0, "outputs": 0},
		0x5C: {"name": "TLOAD", "inputs": 1, "outputs": 1},
		0x5D: {"name": "TSTORE", "inputs": 2, "outputs": 0},
		0x5E: {"name": "MCOPY", "inputs": 3, "outputs": 0},
		0xA0: {"name": "LOG0", "inputs": 2, "outputs": 0},
		0xA1: {"name": "LOG1", "inputs": 3, "outputs": 0},
		0xA2: {"name": "LOG2", "inputs": 4, "outputs": 0},
		0xA3: {"name": "LOG3", "inputs": 5, "outputs": 0},
		0xA4: {"name": "LOG4", "inputs": 6, "outputs": 0},
		0xF0: {"name": "CREATE", "inputs": 3, "outputs": 1},
		0xF1: {"name": "CALL", "inputs": 7, "outputs": 1},
		0xF2: {"name": "CALLCODE", "inputs": 7, "outputs": 1},
		0xF3: {"name": "RETURN", "inputs": 2, "outputs": 0},
		0xF4: {"name": "DELEGATECALL", "inputs": 6, "outputs": 1},
		0xF5: {"name": "CREATE2", "inputs": 4, "outputs": 1},
		0xFA: {"name": "STATICCALL", "inputs": 6, "outputs": 1},
		0xFD: {"name": "REVERT", "inputs": 2, "outputs": 0},
		0xFE: {"name": "INVALID", "inputs": 0, "outputs": 0},
		0xFF: {"name": "SELFDESTRUCT", "inputs": 1, "outputs": 0},
	}
	# add repeated stack opcodes
	for i in range(0, 33):
		opcodes[(i + PUSH0_OPCODE)] = {
			"name": f"PUSH{i}",
			"inputs": 0,
			"outputs": 1,
			"size": i + 1,
		}

	for i in range(1, 16 + 1):
		opcodes[(i + 0x7F)] = {"name": f"DUP{i}", "inputs": i, "outputs": i + 1}

	for i in range(1, 16 + 1):
		opcodes[(i + 0x8F)] = {"name": f"SWAP{i}", "inputs": i + 1, "outputs": i + 1}
	for i in opcodes:
		opcodes[i]["opcode"] = i
	return opcodes


PUSH0_OPCODE = 0x5F
PUSH32_OPCODE = 0x7F

OPCODES = build_opcodes_table()
OPCODE_NAMES = {value["name"]: key for key, value in OPCODES.items()}


def unknown_opcode_name(value: int) -> str:
	return f"UNKNOWN_0x{value:02x}"


def to_bytes(bytecode: BytecodeInput) -> bytes:
	if isinstance(bytecode, str):
		bytecode = bytecode.strip()
		if bytecode[:2].lower() == "0x":
			bytecode = bytecode[2:]
		return bytes.fromhex(bytecode)
	return bytes(bytecode)


def iter_opcodes(bytecode: BytecodeInput) -> Iterator[Opcode]:
	"""
	Decode the bytecode one instruction at a time.

	Decoding never fails, a push running past the end of the buffer gets a short
	operand and bytes missing from the opcode table become argument-less
	instructions.
	"""
	bytecode = to_bytes(bytecode)
	instruction_pointer = 0
	while instruction_pointer < len(bytecode):
		value = bytecode[instruction_pointer]
		opcode = OPCODES.get(value)
		if opcode is None:
			yield Opcode(
				name=unknown_opcode_name(value),
				opcode=value,
				inputs=0,
				outputs=0,
				pc=instruction_pointer,
			)
			instruction_pointer += 1
		elif PUSH0_OPCODE <= value <= PUSH32_OPCODE:
			size = value - PUSH0_OPCODE
			data = bytecode[instruction_pointer + 1 : instruction_pointer + 1 + size]
			yield PushOpcode(
				name=opcode["name"],
				opcode=value,
				inputs=opcode["inputs"],
				outputs=opcode["outputs"],
				pc=instruction_pointer,
				operand=data,
			)
			instruction_pointer += size + 1
		else:
			yield Opcode(
				name=opcode["name"],
				opcode=value,
				inputs=opcode["inputs"],
				outputs=opcode["outputs"],
				pc=instruction_pointer,
			)
			instruction_pointer += 1


def get_opcodes_from_bytes(bytecode: BytecodeInput) -> List[Opcode]:
	return list(iter_opcodes(bytecode))


def format_opcode(opcode: Opcode) -> str:
	if opcode.is_push_opcode and len(opcode.data) > 0:
		return f"{opcode.pc:05x}: {opcode.name} 0x{opcode.data.hex()}"
	return f"{opcode.pc:05x}: {opcode.name}"


def disassemble(bytecode: BytecodeInput) -> List[str]:
	return [format_opcode(i) for i in iter_opcodes(bytecode)]
