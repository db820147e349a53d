import json
import structlog
from ordered_set import OrderedSet
from pathlib import Path
from typing import Iterable, List, Union
from bytecode_inspector.abi import Interface, InvalidInterfaceError

logger = structlog.get_logger()


def normalize_hash(value: str) -> str:
	value = value.strip().lower()
	if value.startswith("0x"):
		return value[2:]
	return value


def is_implemented(interface: Interface, hashes: Iterable[str]) -> bool:
	"""
	Every signature hash of the interface must be in hashes.
	Extra hashes are fine, contracts usually implement more than one interface.
	"""
	available = set(normalize_hash(i) for i in hashes)
	for signature_hash in interface.required_hashes:
		if signature_hash not in available:
			return False
	return True


def implemented_interfaces(
	interfaces: Iterable[Interface], hashes: Iterable[str]
) -> List[str]:
	hashes = set(normalize_hash(i) for i in hashes)
	return [i.name for i in interfaces if is_implemented(i, hashes)]


def signatures_for_selector(
	selector: str, interfaces: Iterable[Interface]
) -> List[str]:
	# Different methods can share a selector, report all of them
	selector = normalize_hash(selector)
	signatures = OrderedSet()
	for interface in interfaces:
		element = interface.get(selector)
		if element is not None:
			signatures.add(element.identifier)
	return list(signatures)


def _read_abi(path: Path):
	with open(path, "r") as file:
		content = json.load(file)
	# compiler artifacts wrap the abi
	if isinstance(content, dict) and "abi" in content:
		content = content["abi"]
	if not isinstance(content, list):
		raise InvalidInterfaceError(path.stem, "expected a list of abi entries")
	return content


def load_interface(path: Union[str, Path]) -> Interface:
	path = Path(path)
	try:
		abi = _read_abi(path)
	except json.JSONDecodeError as e:
		raise InvalidInterfaceError(path.stem, f"invalid json: {e}") from e
	return Interface.from_abi(path.stem, abi)


def load_interfaces(
	abi_dir: Union[str, Path], skip_invalid: bool = False
) -> List[Interface]:
	interfaces = []
	for path in sorted(Path(abi_dir).glob("*.json")):
		try:
			interfaces.append(load_interface(path))
		except InvalidInterfaceError as e:
			if not skip_invalid:
				raise
			logger.warning(
				"Skipping invalid interface", interface=e.interface_name, reason=e.reason
			)
	logger.info("Loaded interface ABIs", count=len(interfaces), path=str(abi_dir))
	return interfaces
