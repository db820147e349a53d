"""
Forward-only view over the decoded instructions.

Detectors only ever look backwards from the current decode position, so the
stream keeps a bounded window of the most recent instructions instead of the
whole program.
"""

from collections import deque
from typing import Deque, Iterator, List, Optional
from bytecode_inspector.opcodes import BytecodeInput, Opcode, iter_opcodes

DEFAULT_WINDOW_CAPACITY = 64


class InstructionStream:
	def __init__(
		self, bytecode: BytecodeInput, capacity: int = DEFAULT_WINDOW_CAPACITY
	):
		assert capacity > 0, "window capacity must be positive"
		self.capacity = capacity
		self._iterator: Iterator[Opcode] = iter_opcodes(bytecode)
		self._window: Deque[Opcode] = deque(maxlen=capacity)
		self.position = 0
		self.exhausted = False

	def next(self) -> bool:
		if self.exhausted:
			return False
		opcode = next(self._iterator, None)
		if opcode is None:
			self.exhausted = True
			return False
		self._window.append(opcode)
		self.position += 1
		return True

	def take(self, n: int) -> Optional[List[Opcode]]:
		taken = []
		for _ in range(n):
			if not self.next():
				return None
			taken.append(self.current)
		return taken

	def last(self, k: int) -> List[Opcode]:
		if k <= 0:
			return []
		window = list(self._window)
		return window[-k:]

	@property
	def current(self) -> Optional[Opcode]:
		if len(self._window) > 0:
			return self._window[-1]
		return None

	def __iter__(self):
		while self.next():
			yield self.current
