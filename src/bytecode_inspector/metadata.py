import cbor2
import structlog

logger = structlog.get_logger()


def strip_metadata(bytecode: bytes) -> bytes:
	"""
	solc appends a CBOR encoded metadata blob followed by its length as two
	big endian bytes. Drop it when the tail decodes, otherwise keep the bytecode.
	"""
	if len(bytecode) < 2:
		return bytecode
	metadata_length = int.from_bytes(bytecode[-2:], byteorder="big")

	if metadata_length > 0 and metadata_length + 2 <= len(bytecode):
		metadata_end = len(bytecode) - 2
		metadata_start = metadata_end - metadata_length

		potential_metadata = bytecode[metadata_start:metadata_end]

		try:
			metadata = cbor2.loads(potential_metadata)
		except (cbor2.CBORDecodeError, ValueError):
			return bytecode
		# solc always emits a map, anything else is a coincidental decode
		if not isinstance(metadata, dict):
			return bytecode
		logger.debug("Stripped metadata", size=metadata_length + 2)
		return bytecode[:metadata_start]
	return bytecode
