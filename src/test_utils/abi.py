def arguments(types, indexed=()):
	return [
		{"name": f"arg{index}", "type": value, "indexed": index in indexed}
		for index, value in enumerate(types)
	]


def function_entry(name: str, types=[], outputs=[], state_mutability="nonpayable"):
	return {
		"type": "function",
		"name": name,
		"inputs": arguments(types),
		"outputs": arguments(outputs),
		"stateMutability": state_mutability,
	}


def event_entry(name: str, types=[], indexed=(), anonymous=False):
	return {
		"type": "event",
		"name": name,
		"inputs": arguments(types, indexed),
		"anonymous": anonymous,
	}


ERC20_ABI = [
	function_entry("allowance", ["address", "address"], ["uint256"], "view"),
	function_entry("approve", ["address", "uint256"], ["bool"]),
	function_entry("balanceOf", ["address"], ["uint256"], "view"),
	function_entry("totalSupply", [], ["uint256"], "view"),
	function_entry("transfer", ["address", "uint256"], ["bool"]),
	function_entry("transferFrom", ["address", "address", "uint256"], ["bool"]),
	event_entry("Transfer", ["address", "address", "uint256"], indexed=(0, 1)),
	event_entry("Approval", ["address", "address", "uint256"], indexed=(0, 1)),
]

ERC165_ABI = [
	function_entry("supportsInterface", ["bytes4"], ["bool"], "view"),
]

OWNABLE_ABI = [
	function_entry("owner", [], ["address"], "view"),
	function_entry("transferOwnership", ["address"]),
	event_entry(
		"OwnershipTransferred", ["address", "address"], indexed=(0, 1)
	),
]

ERC20_SELECTORS = {
	"allowance(address,address)": "dd62ed3e",
	"approve(address,uint256)": "095ea7b3",
	"balanceOf(address)": "70a08231",
	"totalSupply()": "18160ddd",
	"transfer(address,uint256)": "a9059cbb",
	"transferFrom(address,address,uint256)": "23b872dd",
}

TRANSFER_TOPIC = "ddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
APPROVAL_TOPIC = "8c5be1e5ebec7d5bd14f71427d1e84f3dd0314c0f7b2291e5b200ac8c7c3b925"
