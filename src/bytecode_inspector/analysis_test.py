from bytecode_inspector.abi import Interface
from bytecode_inspector.analysis import analyze
from bytecode_inspector.settings import AnalysisSettings
from test_utils.abi import (
	APPROVAL_TOPIC,
	ERC165_ABI,
	ERC20_ABI,
	ERC20_SELECTORS,
	TRANSFER_TOPIC,
)
from test_utils.bytecodes import (
	MINIMAL_PROXY,
	NON_PAYABLE_CHECK,
	SOLC_METADATA,
	assemble,
	dispatch_table,
)


def erc20_bytecode():
	code = assemble(*NON_PAYABLE_CHECK)
	code += dispatch_table(["0x" + i for i in sorted(ERC20_SELECTORS.values())])
	for topic in [TRANSFER_TOPIC, APPROVAL_TOPIC]:
		code += assemble(
			"JUMPDEST",
			f"PUSH32 0x{topic}",
			"PUSH1 0x40",
			"MLOAD",
			"DUP1",
			"SWAP2",
			"SUB",
			"SWAP1",
			"LOG3",
		)
	return code


def test_analyze_erc20():
	interfaces = [
		Interface.from_abi("IERC20", ERC20_ABI),
		Interface.from_abi("IERC165", ERC165_ABI),
	]
	info = analyze(erc20_bytecode(), interfaces)
	assert not info.is_proxy
	assert set(info.selectors) == set(ERC20_SELECTORS.values())
	assert info.topics == [TRANSFER_TOPIC, APPROVAL_TOPIC]
	assert info.interfaces == ["IERC20"]
	assert info.methods["a9059cbb"] == ["transfer(address,uint256)"]
	assert info.size == len(erc20_bytecode())


def test_analyze_without_interfaces():
	info = analyze(erc20_bytecode().hex())
	assert len(info.selectors) == 6
	assert all(i == [] for i in info.methods.values())
	assert info.interfaces == []


def test_analyze_proxy():
	info = analyze(MINIMAL_PROXY, [Interface("Empty", [])])
	assert info.is_proxy
	assert info.selectors == []
	assert info.topics == []
	assert info.interfaces == ["Empty"]


def test_analyze_empty():
	info = analyze(b"")
	assert not info.is_proxy
	assert info.size == 0


def test_strip_metadata_setting():
	code = erc20_bytecode()
	info = analyze(code + SOLC_METADATA, settings=AnalysisSettings(strip_metadata=True))
	assert info.size == len(code)
	info = analyze(code + SOLC_METADATA)
	assert info.size == len(code) + len(SOLC_METADATA)
