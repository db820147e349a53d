from bytecode_inspector.metadata import strip_metadata
from test_utils.bytecodes import SOLC_METADATA, dispatch_table


def test_strip_metadata():
	code = dispatch_table(["0xaabbccdd"])
	assert strip_metadata(code + SOLC_METADATA) == code


def test_keeps_bytecode_without_metadata():
	code = dispatch_table(["0xaabbccdd"])
	assert strip_metadata(code) == code
	assert strip_metadata(b"") == b""
	assert strip_metadata(b"\x00") == b"\x00"
	# length points past the start
	assert strip_metadata(bytes.fromhex("6001ffff")) == bytes.fromhex("6001ffff")
