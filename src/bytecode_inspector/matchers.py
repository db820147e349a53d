from dataclasses import dataclass
from typing import Callable, List, Sequence, Tuple
from bytecode_inspector.opcodes import Opcode, to_bytes
from bytecode_inspector.stream import InstructionStream

Matcher = Callable[[Opcode], bool]


@dataclass(frozen=True)
class OpExact:
	name: str

	def __call__(self, opcode: Opcode) -> bool:
		return opcode.name == self.name


@dataclass(frozen=True)
class OpAnyOf:
	names: Tuple[str, ...]

	def __init__(self, *names: str):
		object.__setattr__(self, "names", tuple(names))

	def __call__(self, opcode: Opcode) -> bool:
		return opcode.name in self.names


@dataclass(frozen=True)
class PushValue:
	value: bytes

	def __init__(self, value: str):
		object.__setattr__(self, "value", to_bytes(value))

	def __call__(self, opcode: Opcode) -> bool:
		return opcode.is_push_opcode and opcode.data == self.value


@dataclass(frozen=True)
class AnyOf:
	matchers: Tuple[Matcher, ...]

	def __init__(self, *matchers: Matcher):
		object.__setattr__(self, "matchers", tuple(matchers))

	def __call__(self, opcode: Opcode) -> bool:
		return any(match(opcode) for match in self.matchers)


@dataclass(frozen=True)
class Pattern:
	name: str
	matchers: Tuple[Matcher, ...]

	def __len__(self):
		return len(self.matchers)

	def match(self, window: Sequence[Opcode]) -> bool:
		if len(window) < len(self.matchers):
			return False
		for opcode, match in zip(window, self.matchers):
			if not match(opcode):
				return False
		return True

	def match_last(self, stream: InstructionStream) -> bool:
		return self.match(stream.last(len(self)))


def create_pattern(name: str, matchers: List[Matcher]) -> Pattern:
	return Pattern(name=name, matchers=tuple(matchers))


def scan(stream: InstructionStream, pattern: Pattern) -> bool:
	assert len(pattern) <= stream.capacity, (
		f"{pattern.name} does not fit in a window of {stream.capacity}"
	)
	while stream.next():
		if pattern.match_last(stream):
			return True
	return False
