import json
import sys
import pytest
from bytecode_inspector import cli
from test_utils.abi import ERC165_ABI, ERC20_ABI
from test_utils.bytecodes import MINIMAL_PROXY, dispatch_table


def run_cli(monkeypatch, capsys, *args):
	monkeypatch.setattr(sys, "argv", ["bytecode_inspector", *args])
	cli.main()
	return capsys.readouterr().out


def test_cli_bytecode(monkeypatch, capsys, tmp_path):
	abis = tmp_path / "abis"
	abis.mkdir()
	(abis / "IERC165.json").write_text(json.dumps(ERC165_ABI))
	(abis / "IERC20.json").write_text(json.dumps(ERC20_ABI))
	bytecode = dispatch_table(["0x01ffc9a7", "0xaabbccdd"])

	output = run_cli(
		monkeypatch, capsys, "--bytecode", "0x" + bytecode.hex(), "--abis", str(abis)
	)
	assert "Loaded 2 interface ABIs" in output
	assert "Is Proxy Contract   false" in output
	assert "- 01ffc9a7 supportsInterface(bytes4)" in output
	assert "- aabbccdd" in output
	assert "Possible Interfaces" in output
	assert "- IERC165" in output
	assert "- IERC20" not in output


def test_cli_filepath_and_disassemble(monkeypatch, capsys, tmp_path):
	path = tmp_path / "proxy.bin"
	path.write_bytes(MINIMAL_PROXY)
	output = run_cli(
		monkeypatch,
		capsys,
		"--filepath",
		str(path),
		"--abis",
		str(tmp_path / "missing"),
		"--disassemble",
	)
	assert "00000: CALLDATASIZE" in output
	assert "Is Proxy Contract true" in output
	assert "Possible Interfaces" not in output


def test_cli_hex_file(monkeypatch, capsys, tmp_path):
	path = tmp_path / "code.hex"
	path.write_text(MINIMAL_PROXY.hex() + "\n")
	output = run_cli(monkeypatch, capsys, "--filepath", str(path))
	assert "Is Proxy Contract true" in output


def test_cli_invalid_hex(monkeypatch, capsys):
	with pytest.raises(SystemExit) as error:
		run_cli(monkeypatch, capsys, "--bytecode", "0xzz")
	assert error.value.code == 1


def test_cli_invalid_interface(monkeypatch, capsys, tmp_path):
	(tmp_path / "Bad.json").write_text(json.dumps([{"type": "modifier"}]))
	with pytest.raises(SystemExit) as error:
		run_cli(monkeypatch, capsys, "--bytecode", "00", "--abis", str(tmp_path))
	assert error.value.code == 1
	assert "invalid contract interface abi Bad" in capsys.readouterr().out


def test_render_contract_info():
	info = cli.ContractInfo(
		is_proxy=False,
		size=10,
		selectors=["aabbccdd"],
		topics=["11" * 32, "22" * 32],
		methods={"aabbccdd": ["a()", "b()"]},
		interfaces=[],
	)
	assert cli.render_contract_info(info).split("\n") == [
		"Contract information:",
		"Bytecode Size     10",
		"Is Proxy Contract false",
		"Possible Methods  - aabbccdd a(),b()",
		"Possible Events   " + "11" * 32,
		"                  " + "22" * 32,
	]
