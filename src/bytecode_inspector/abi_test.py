import pytest
from bytecode_inspector.abi import (
	ABIElement,
	Argument,
	Interface,
	InvalidInterfaceError,
	four_bytes_sig_of,
)
from test_utils.abi import (
	APPROVAL_TOPIC,
	ERC20_ABI,
	ERC20_SELECTORS,
	TRANSFER_TOPIC,
	event_entry,
	function_entry,
)


def test_transfer_selector_is_stable():
	element = ABIElement.from_dict(function_entry("transfer", ["address", "uint256"]))
	assert element.identifier == "transfer(address,uint256)"
	assert element.signature_hash == "a9059cbb"
	assert element.signature_hash == ABIElement.from_dict(
		function_entry("transfer", ["address", "uint256"])
	).signature_hash
	assert four_bytes_sig_of("transfer(address,uint256)") == "a9059cbb"


def test_event_hash_is_full_keccak():
	element = ABIElement.from_dict(
		event_entry("Transfer", ["address", "address", "uint256"], indexed=(0, 1))
	)
	# indexed-ness and argument names are not part of the identifier
	assert element.identifier == "Transfer(address,address,uint256)"
	assert element.signature_hash == TRANSFER_TOPIC
	assert len(element.signature_hash) == 64


def test_error_hash_is_four_bytes():
	element = ABIElement.from_dict(
		{"type": "error", "name": "Unauthorized", "inputs": []}
	)
	assert element.identifier == "Unauthorized()"
	assert len(element.signature_hash) == 8


def test_type_aliases_are_normalized():
	element = ABIElement.from_dict(function_entry("transfer", ["address", "uint"]))
	assert element.identifier == "transfer(address,uint256)"
	assert element.signature_hash == "a9059cbb"


def test_tuple_arguments():
	entry = {
		"type": "function",
		"name": "submit",
		"inputs": [
			{
				"name": "order",
				"type": "tuple[]",
				"components": [
					{"name": "maker", "type": "address"},
					{
						"name": "amounts",
						"type": "tuple",
						"components": [
							{"name": "a", "type": "uint"},
							{"name": "b", "type": "bytes32[2]"},
						],
					},
				],
			},
			{"name": "deadline", "type": "uint64"},
		],
	}
	element = ABIElement.from_dict(entry)
	assert element.identifier == "submit((address,(uint256,bytes32[2]))[],uint64)"


def test_legacy_state_mutability():
	assert (
		ABIElement.from_dict(
			{"type": "function", "name": "a", "inputs": [], "constant": True}
		).state_mutability
		== "view"
	)
	assert (
		ABIElement.from_dict(
			{"type": "function", "name": "a", "inputs": [], "payable": True}
		).state_mutability
		== "payable"
	)
	assert ABIElement.from_dict({"name": "a"}).type == "function"


def test_interface_keys():
	interface = Interface.from_abi("IERC20", ERC20_ABI)
	assert interface.name == "IERC20"
	assert set(interface.selectors) == set(ERC20_SELECTORS.values())
	assert set(interface.topics) == {TRANSFER_TOPIC, APPROVAL_TOPIC}
	assert len(interface) == 8
	assert "a9059cbb" in interface
	assert interface.get("a9059cbb").identifier == "transfer(address,uint256)"
	assert interface.get("ffffffff") is None


def test_interface_elements_are_read_only():
	interface = Interface.from_abi("IERC20", ERC20_ABI)
	with pytest.raises(TypeError):
		interface.elements["00000000"] = interface.get("a9059cbb")
	with pytest.raises(AttributeError):
		interface.name = "other"


def test_invalid_element_type():
	with pytest.raises(InvalidInterfaceError) as error:
		Interface("Broken", [ABIElement(type="modifier", name="onlyOwner")])
	assert error.value.interface_name == "Broken"
	assert "Broken" in str(error.value)


def test_invalid_state_mutability():
	with pytest.raises(InvalidInterfaceError):
		Interface(
			"Broken", [ABIElement(type="function", name="a", state_mutability="free")]
		)


def test_single_fallback():
	fallback = ABIElement(type="fallback")
	Interface("Ok", [fallback])
	with pytest.raises(InvalidInterfaceError) as error:
		Interface("Broken", [fallback, fallback])
	assert "fallback" in error.value.reason


def test_receive_rules():
	receive = ABIElement(type="receive", state_mutability="payable")
	interface = Interface("Ok", [receive, ABIElement(type="fallback")])
	assert interface.has_receive
	assert interface.has_fallback
	assert len(interface) == 0
	with pytest.raises(InvalidInterfaceError):
		Interface("Broken", [receive, receive])
	with pytest.raises(InvalidInterfaceError):
		Interface("Broken", [ABIElement(type="receive", state_mutability="nonpayable")])


def test_required_hashes():
	entries = ERC20_ABI + [
		{"type": "constructor", "inputs": [{"name": "supply", "type": "uint256"}]},
		{"type": "error", "name": "InsufficientBalance", "inputs": []},
		event_entry("Debug", ["uint256"], anonymous=True),
	]
	interface = Interface.from_abi("Token", entries)
	error = ABIElement.from_dict(entries[-2]).signature_hash
	debug = ABIElement.from_dict(entries[-1]).signature_hash
	assert set(interface.required_hashes) == set(ERC20_SELECTORS.values()) | {
		TRANSFER_TOPIC,
		APPROVAL_TOPIC,
		error,
		debug,
	}
	assert len(interface.required_hashes) == len(interface)
	assert interface.errors == [error]


def test_malformed_entries():
	with pytest.raises(InvalidInterfaceError) as error:
		Interface.from_abi("Broken", ["not an entry"])
	assert error.value.interface_name == "Broken"
	with pytest.raises(InvalidInterfaceError):
		Interface.from_abi("Broken", [function_entry(5)])
	with pytest.raises(InvalidInterfaceError):
		Interface.from_abi(
			"Broken", [{"type": "function", "name": "f", "inputs": [{"type": 5}]}]
		)
	with pytest.raises(InvalidInterfaceError):
		Interface.from_abi(
			"Broken", [{"type": "function", "name": "f", "inputs": ["uint256"]}]
		)


def test_unhashable_element():
	element = ABIElement(type="function", name="f", inputs=(Argument(name="a", type=5),))
	with pytest.raises(InvalidInterfaceError) as error:
		Interface("Broken", [element])
	assert error.value.interface_name == "Broken"


def test_hash_collision_keeps_last():
	# both hash to 0x42966c68
	first = ABIElement.from_dict(function_entry("burn", ["uint256"]))
	second = ABIElement(
		type="function",
		name="burn",
		inputs=(Argument(name="amount", type="uint"),),
	)
	interface = Interface("Burnable", [first, second])
	assert len(interface) == 1
	assert interface.get(first.signature_hash) is second


def test_malformed_entry():
	with pytest.raises(InvalidInterfaceError):
		Interface.from_abi("Broken", [{"type": "function", "inputs": [{"name": "a"}]}])
