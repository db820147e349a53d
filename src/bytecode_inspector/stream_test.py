from bytecode_inspector.stream import InstructionStream
from test_utils.bytecodes import assemble


def test_window_is_bounded():
	stream = InstructionStream(assemble(*(["JUMPDEST"] * 10), "STOP"), capacity=4)
	assert stream.current is None
	assert stream.last(3) == []
	while stream.next():
		pass
	window = stream.last(10)
	assert len(window) == 4
	assert [i.pc for i in window] == [7, 8, 9, 10]
	assert window[-1].name == "STOP"
	assert stream.position == 11


def test_last_is_oldest_first():
	stream = InstructionStream(assemble("PUSH1 0x01", "DUP1", "ADD"))
	assert stream.take(3) is not None
	assert [i.name for i in stream.last(2)] == ["DUP1", "ADD"]
	assert stream.last(0) == []


def test_take_past_the_end():
	stream = InstructionStream(assemble("DUP1", "ADD"))
	assert stream.take(3) is None
	assert stream.exhausted
	assert not stream.next()


def test_iteration():
	stream = InstructionStream(assemble("DUP1", "ADD", "STOP"))
	assert [i.name for i in stream] == ["DUP1", "ADD", "STOP"]
	assert list(stream) == []
