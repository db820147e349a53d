from bytecode_inspector.abi import ABIElement, Interface, InvalidInterfaceError
from bytecode_inspector.analysis import ContractInfo, analyze
from bytecode_inspector.detectors import (
	extract_event_topics,
	extract_selectors,
	is_proxy,
)
from bytecode_inspector.interfaces import (
	implemented_interfaces,
	is_implemented,
	load_interfaces,
	signatures_for_selector,
)
from bytecode_inspector.opcodes import disassemble, get_opcodes_from_bytes
from bytecode_inspector.settings import AnalysisSettings
