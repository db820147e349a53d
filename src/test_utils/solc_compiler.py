import solcx
from dataclasses import dataclass
from bytecode_inspector.metadata import strip_metadata


@dataclass
class CompilerSettings:
	via_ir: bool = False
	optimizer_enabled: bool = False
	optimization_runs: int = 200
	evm_version: str = "paris"
	solc_version: str = "0.8.26"
	keep_metadata: bool = False

	def optimize(self, optimization_runs=200, via_ir=False):
		self.via_ir = via_ir
		self.optimization_runs = optimization_runs
		self.optimizer_enabled = True
		return self


class SolcCompiler:
	def compile(self, file_content, settings=CompilerSettings()) -> bytes:
		output = self._get_solidity_output(file_content, settings)
		code = self._get_solc_bytecode(output, "main.sol")
		if code is not None and not settings.keep_metadata:
			return strip_metadata(code)
		return code

	def _get_solidity_output(self, file_content, settings: CompilerSettings):
		solcx.install_solc(settings.solc_version)
		request = self._get_standard_json(
			file_content,
			settings,
		)
		return solcx.compile_standard(
			request,
			solc_version=settings.solc_version,
		)

	def _get_standard_json(
		self,
		file_content: str,
		settings: CompilerSettings = CompilerSettings(),
	):
		return {
			"language": "Solidity",
			"sources": {
				"main.sol": {
					"content": file_content,
				}
			},
			"settings": {
				"outputSelection": {
					"*": {
						"*": [
							"evm.deployedBytecode.object",
						],
					}
				},
				"evmVersion": settings.evm_version,
				"optimizer": {
					"enabled": settings.optimizer_enabled,
					"runs": settings.optimization_runs,
				},
				"viaIR": settings.via_ir,
			},
		}

	def _get_solc_bytecode(self, output, file, key="deployedBytecode"):
		solc = output["contracts"][file]
		for i in list(solc.keys()):
			ref = solc[i]["evm"][key]["object"]
			code = bytes.fromhex(ref)
			if len(code) > 0:
				return code
		return None
