import structlog
from dataclasses import dataclass, field
from typing import Dict, Iterable, List
from bytecode_inspector.abi import Interface
from bytecode_inspector.detectors import (
	extract_event_topics,
	extract_selectors,
	is_proxy,
)
from bytecode_inspector.interfaces import (
	implemented_interfaces,
	signatures_for_selector,
)
from bytecode_inspector.metadata import strip_metadata
from bytecode_inspector.opcodes import BytecodeInput, to_bytes
from bytecode_inspector.settings import AnalysisSettings

logger = structlog.get_logger()


@dataclass
class ContractInfo:
	is_proxy: bool
	size: int
	selectors: List[str] = field(default_factory=list)
	topics: List[str] = field(default_factory=list)
	# selector -> every known signature hashing to it
	methods: Dict[str, List[str]] = field(default_factory=dict)
	interfaces: List[str] = field(default_factory=list)


def analyze(
	bytecode: BytecodeInput,
	interfaces: Iterable[Interface] = (),
	settings=AnalysisSettings(),
) -> ContractInfo:
	bytecode = to_bytes(bytecode)
	if settings.strip_metadata:
		bytecode = strip_metadata(bytecode)
	interfaces = list(interfaces)

	selectors = list(extract_selectors(bytecode, settings))
	topics = list(extract_event_topics(bytecode, settings))
	info = ContractInfo(
		is_proxy=is_proxy(bytecode, settings),
		size=len(bytecode),
		selectors=selectors,
		topics=topics,
		methods={
			selector: signatures_for_selector(selector, interfaces)
			for selector in selectors
		},
		interfaces=implemented_interfaces(interfaces, selectors + topics),
	)
	logger.debug(
		"Analyzed bytecode",
		size=info.size,
		is_proxy=info.is_proxy,
		selectors=len(info.selectors),
		topics=len(info.topics),
		interfaces=info.interfaces,
	)
	return info
