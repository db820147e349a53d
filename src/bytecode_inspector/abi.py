from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Optional, Tuple
from eth_abi.grammar import normalize
from eth_utils import keccak as _keccak

CONSTRUCTOR = "constructor"
FUNCTION = "function"
EVENT = "event"
FALLBACK = "fallback"
RECEIVE = "receive"
ERROR = "error"

ELEMENT_TYPES = (CONSTRUCTOR, FUNCTION, EVENT, FALLBACK, RECEIVE, ERROR)
HASHED_ELEMENT_TYPES = (FUNCTION, EVENT, ERROR)
STATE_MUTABILITIES = ("pure", "view", "nonpayable", "payable")


def keccak(value: bytes) -> bytes:
	return _keccak(value)


def four_bytes_sig_of(signature: str) -> str:
	return keccak(signature.encode())[:4].hex()


class InvalidInterfaceError(Exception):
	def __init__(self, interface_name: str, reason: str):
		super().__init__(f"invalid contract interface abi {interface_name}: {reason}")
		self.interface_name = interface_name
		self.reason = reason


def _check_entry(entry):
	if not isinstance(entry, Mapping):
		raise TypeError(f"abi entry must be an object, got {type(entry).__name__}")


def _string_field(entry: Mapping, key: str, default: Optional[str] = None) -> str:
	if default is None:
		value = entry[key]
	else:
		value = entry.get(key, default)
	if not isinstance(value, str):
		raise TypeError(f"abi field {key} must be a string, got {value!r}")
	return value


@dataclass(frozen=True)
class Argument:
	name: str
	type: str
	indexed: bool = False
	components: Tuple["Argument", ...] = ()

	@property
	def canonical_type(self) -> str:
		if self.type.startswith("tuple"):
			suffix = self.type[len("tuple") :]
			inner = ",".join(i.canonical_type for i in self.components)
			return f"({inner}){suffix}"
		return normalize(self.type)

	@classmethod
	def from_dict(cls, entry: Mapping) -> "Argument":
		_check_entry(entry)
		return cls(
			name=_string_field(entry, "name", ""),
			type=_string_field(entry, "type"),
			indexed=bool(entry.get("indexed", False)),
			components=tuple(cls.from_dict(i) for i in entry.get("components", [])),
		)


def _state_mutability_of(entry: Mapping) -> str:
	if "stateMutability" in entry:
		return entry["stateMutability"]
	# Pre 0.4.16 ABIs only carry the constant / payable flags
	if entry.get("payable", False):
		return "payable"
	if entry.get("constant", False):
		return "view"
	return "nonpayable"


@dataclass(frozen=True)
class ABIElement:
	type: str
	name: str = ""
	inputs: Tuple[Argument, ...] = ()
	outputs: Tuple[Argument, ...] = ()
	state_mutability: str = "nonpayable"
	anonymous: bool = False

	@property
	def identifier(self) -> str:
		types = ",".join(i.canonical_type for i in self.inputs)
		return f"{self.name}({types})"

	@property
	def signature_hash(self) -> Optional[str]:
		if self.type not in HASHED_ELEMENT_TYPES:
			return None
		digest = keccak(self.identifier.encode())
		if self.type == EVENT:
			return digest.hex()
		return digest[:4].hex()

	@classmethod
	def from_dict(cls, entry: Mapping) -> "ABIElement":
		_check_entry(entry)
		return cls(
			# Solidity defaults a missing type to function
			type=_string_field(entry, "type", FUNCTION),
			name=_string_field(entry, "name", ""),
			inputs=tuple(Argument.from_dict(i) for i in entry.get("inputs", [])),
			outputs=tuple(Argument.from_dict(i) for i in entry.get("outputs", [])),
			state_mutability=_state_mutability_of(entry),
			anonymous=bool(entry.get("anonymous", False)),
		)


class Interface:
	"""
	Named set of ABI elements keyed by their signature hash.

	Constructor, fallback and receive entries are validated and kept but they have
	no hash, so they never take part in matching.
	"""

	def __init__(self, name: str, elements: Iterable[ABIElement]):
		self._name = name
		self._elements: Dict[str, ABIElement] = {}
		self._unhashed: List[ABIElement] = []

		has_fallback = False
		has_receive = False
		for item in elements:
			if item.type not in ELEMENT_TYPES:
				raise InvalidInterfaceError(name, f"invalid abi entry type: {item.type}")
			if item.state_mutability not in STATE_MUTABILITIES:
				raise InvalidInterfaceError(
					name, f"invalid state mutability: {item.state_mutability}"
				)
			if item.type == FALLBACK:
				if has_fallback:
					raise InvalidInterfaceError(name, "only single fallback is allowed")
				has_fallback = True
			elif item.type == RECEIVE:
				if has_receive:
					raise InvalidInterfaceError(name, "only single receive is allowed")
				if item.state_mutability != "payable":
					raise InvalidInterfaceError(
						name, "the statemutability of receive can only be payable"
					)
				has_receive = True

			try:
				signature_hash = item.signature_hash
			except (AttributeError, TypeError, ValueError) as e:
				raise InvalidInterfaceError(
					name, f"cannot hash {item.type} {item.name!r}: {e}"
				) from e
			if signature_hash is None:
				self._unhashed.append(item)
			else:
				# Collisions resolve to the last element in list order
				self._elements[signature_hash] = item

	@classmethod
	def from_abi(cls, name: str, abi: Iterable[Mapping]) -> "Interface":
		elements = []
		for entry in abi:
			try:
				elements.append(ABIElement.from_dict(entry))
			except (KeyError, TypeError, ValueError) as e:
				raise InvalidInterfaceError(name, f"malformed abi entry {entry!r}") from e
		return cls(name, elements)

	@property
	def name(self) -> str:
		return self._name

	@property
	def elements(self) -> Mapping[str, ABIElement]:
		return MappingProxyType(self._elements)

	def _hashes_of(self, element_type: str) -> List[str]:
		return [key for key, value in self._elements.items() if value.type == element_type]

	@property
	def selectors(self) -> List[str]:
		return self._hashes_of(FUNCTION)

	@property
	def topics(self) -> List[str]:
		return self._hashes_of(EVENT)

	@property
	def errors(self) -> List[str]:
		return self._hashes_of(ERROR)

	@property
	def required_hashes(self) -> List[str]:
		# every hashed element, errors and anonymous events included
		return list(self._elements)

	@property
	def has_fallback(self) -> bool:
		return any(i.type == FALLBACK for i in self._unhashed)

	@property
	def has_receive(self) -> bool:
		return any(i.type == RECEIVE for i in self._unhashed)

	def get(self, signature_hash: str) -> Optional[ABIElement]:
		return self._elements.get(signature_hash)

	def __contains__(self, signature_hash):
		return signature_hash in self._elements

	def __len__(self):
		return len(self._elements)

	def __repr__(self):
		return f"Interface({self._name}, {len(self._elements)} elements)"
