"""
Heuristics over the instruction stream.

None of these build a control flow graph, they only look for the fixed
instruction idioms in patterns.py. A miss means the idiom is not there, not
that the contract lacks the feature.
"""

import structlog
from ordered_set import OrderedSet
from typing import Optional
from bytecode_inspector.opcodes import BytecodeInput, Opcode
from bytecode_inspector.matchers import scan
from bytecode_inspector.patterns import (
	END_JUMP_TABLE_PATTERN,
	FUNC_SELECTOR_PATTERN,
	JUMP_TABLE_PATTERN,
	LOG_OPCODES,
	PROXY_PATTERN,
	SELECTOR_PUSH_INDEX,
	SPLIT_SELECTOR_PATTERN,
)
from bytecode_inspector.settings import AnalysisSettings
from bytecode_inspector.stream import InstructionStream

logger = structlog.get_logger()

SELECTOR_SIZE = 4
TOPIC_SIZE = 32


def is_proxy(bytecode: BytecodeInput, settings=AnalysisSettings()) -> bool:
	stream = InstructionStream(
		bytecode, settings.stream_capacity(len(PROXY_PATTERN))
	)
	if scan(stream, PROXY_PATTERN):
		logger.debug("Found delegate proxy pattern", pc=stream.current.pc)
		return True
	return False


def selector_from_push(opcode: Opcode) -> str:
	return opcode.data.rjust(SELECTOR_SIZE, b"\x00").hex()


def topic_from_push(opcode: Opcode) -> str:
	return opcode.data.rjust(TOPIC_SIZE, b"\x00")[-TOPIC_SIZE:].hex()


def extract_selectors(bytecode: BytecodeInput, settings=AnalysisSettings()) -> OrderedSet:
	"""
	Collect the 4-byte selectors compared against in the dispatch table.

	The table starts after the calldata prologue and every DUP1 PUSH4 EQ PUSH JUMPI
	entry until the fallback revert is a selector. Split entries (GT instead of
	EQ) are binary search nodes, both halves follow them linearly in the
	bytecode so the forward scan visits every leaf without recursing.
	"""
	stream = InstructionStream(bytecode, settings.stream_capacity())
	selectors = OrderedSet()
	while scan(stream, JUMP_TABLE_PATTERN):
		logger.debug("Found jump table", pc=stream.current.pc)
		terminated = False
		while stream.next():
			window = stream.last(len(FUNC_SELECTOR_PATTERN))
			if FUNC_SELECTOR_PATTERN.match(window):
				selectors.add(selector_from_push(window[SELECTOR_PUSH_INDEX]))
			elif SPLIT_SELECTOR_PATTERN.match(window):
				logger.debug(
					"Found split selector",
					pivot=selector_from_push(window[SELECTOR_PUSH_INDEX]),
				)
			if END_JUMP_TABLE_PATTERN.match_last(stream):
				logger.debug("Found end of jump table", pc=stream.current.pc)
				terminated = True
				break
		if not terminated:
			logger.debug("Jump table is not terminated", selectors=len(selectors))
		if not settings.scan_all_tables:
			break
	return selectors


def find_topic_push(window) -> Optional[Opcode]:
	for opcode in reversed(window):
		if opcode.name == "PUSH32":
			return opcode
	return None


def extract_event_topics(
	bytecode: BytecodeInput, settings=AnalysisSettings()
) -> OrderedSet:
	lookback = settings.topic_lookback
	stream = InstructionStream(bytecode, settings.stream_capacity())
	topics = OrderedSet()
	for opcode in stream:
		if opcode.name not in LOG_OPCODES:
			continue
		# the window ends with the LOG itself
		preceding = stream.last(lookback + 1)[:-1]
		push = find_topic_push(preceding)
		if push is None:
			logger.debug("No topic push before log", pc=opcode.pc, log=opcode.name)
			continue
		topics.add(topic_from_push(push))
	return topics
