from setuptools import setup, find_packages

install_requires = [
	"ordered-set>=4.1.0",
	"eth-abi>=4.2.1",
	"eth-utils>=2.0.0",
	"eth-hash[pycryptodome]>=0.5.0",
	"cbor2>=5.4.0",
	"structlog>=23.1.0",
]

dev_requires = [
	"pytest>=8.3.5",
	"hypothesis>=6.0.0",
	"py-solc-x>=2.0.3",
]

setup(
	name="bytecode_inspector",
	version="0.1",
	packages=find_packages(where="src", exclude=["test_utils"]),
	package_dir={"": "src"},
	install_requires=install_requires,
	extras_require={
		"dev": dev_requires,
		"test": dev_requires,
	},
	entry_points={
		"console_scripts": [
			"bytecode_inspector=bytecode_inspector.cli:main",
		],
	},
)
