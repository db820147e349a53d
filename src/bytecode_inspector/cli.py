import argparse
import os
import structlog
from pathlib import Path
from bytecode_inspector.abi import InvalidInterfaceError
from bytecode_inspector.analysis import ContractInfo, analyze
from bytecode_inspector.interfaces import load_interfaces
from bytecode_inspector.log import LOG_LEVELS, configure_logging
from bytecode_inspector.opcodes import disassemble, to_bytes
from bytecode_inspector.settings import AnalysisSettings

logger = structlog.get_logger()

VERBOSITY_ENV = "BYTECODE_INSPECTOR_VERBOSITY"


def render_method_list(methods):
	return "\n".join(
		f"- {selector} {','.join(signatures)}".rstrip()
		for selector, signatures in methods.items()
	)


def render_interface_list(interface_names):
	return "\n".join(f"- {name}" for name in interface_names)


def render_contract_info(info: ContractInfo) -> str:
	rows = [
		("Bytecode Size", str(info.size)),
		("Is Proxy Contract", str(info.is_proxy).lower()),
		("Possible Methods", render_method_list(info.methods)),
		("Possible Events", "\n".join(info.topics)),
	]
	if len(info.interfaces) > 0:
		rows.append(("Possible Interfaces", render_interface_list(info.interfaces)))

	width = max(len(key) for key, _ in rows)
	lines = ["Contract information:"]
	for key, value in rows:
		values = value.split("\n") if len(value) > 0 else [""]
		lines.append(f"{key.ljust(width)} {values[0]}".rstrip())
		for i in values[1:]:
			lines.append(f"{' ' * width} {i}")
	return "\n".join(lines)


def read_bytecode(args) -> bytes:
	if args.filepath:
		data = Path(args.filepath).read_bytes()
		# accept both raw .bin dumps and hex text files
		try:
			return to_bytes(data.decode("ascii"))
		except (UnicodeDecodeError, ValueError):
			return data
	return to_bytes(args.bytecode)


def main():
	parser = argparse.ArgumentParser(
		description="Recover selectors, event topics and interfaces from EVM bytecode"
	)

	# input source
	group = parser.add_mutually_exclusive_group(required=True)
	group.add_argument("--bytecode", type=str, help="Bytecode as a hex string")
	group.add_argument(
		"--filepath",
		type=str,
		help="Path to a file holding the bytecode as hex or raw bytes",
	)

	# options
	parser.add_argument(
		"--abis",
		default="abis",
		help="ABIs directory to load the contract interfaces",
	)
	parser.add_argument(
		"--disassemble",
		default=False,
		action="store_true",
		help="Print the disassembled bytecode",
	)
	parser.add_argument(
		"--strip-metadata",
		default=False,
		action="store_true",
		help="Remove the solc CBOR metadata trailer before analysis",
	)
	parser.add_argument(
		"--verbosity",
		choices=LOG_LEVELS,
		default=os.environ.get(VERBOSITY_ENV, "WARNING").upper(),
		help="Log verbosity level",
	)

	args = parser.parse_args()
	if args.verbosity not in LOG_LEVELS:
		print(f"Error: unknown verbosity {args.verbosity}")
		exit(1)
	configure_logging(args.verbosity)

	try:
		bytecode = read_bytecode(args)
	except ValueError as e:
		print(f"Error: bytecode is not valid hex: {e}")
		exit(1)

	interfaces = []
	if Path(args.abis).is_dir():
		try:
			interfaces = load_interfaces(args.abis)
		except InvalidInterfaceError as e:
			print(f"Error: could not parse interface abi: {e}")
			exit(1)
		print(f"Loaded {len(interfaces)} interface ABIs")
	else:
		logger.info("No ABIs directory", path=args.abis)

	if args.disassemble:
		print("\n".join(disassemble(bytecode)))

	settings = AnalysisSettings(strip_metadata=args.strip_metadata)
	print(render_contract_info(analyze(bytecode, interfaces, settings)))


if __name__ == "__main__":
	main()
