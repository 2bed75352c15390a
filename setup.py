import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="cbf",
    version="0.0.1",
    description="CHIP-8 binary format: pack and unpack bytecode with its metadata",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/Timendus/chip8-binary-format",
    packages=setuptools.find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        'bitstring',
        'pillow',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
