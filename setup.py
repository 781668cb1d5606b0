import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="bootstruct",
    version="0.0.1",
    author="Gianluca Pacchiella",
    author_email="gp@ktln2.org",
    description="Codec layer for Android boot images",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/gipi/bootstruct",
    packages=setuptools.find_packages(exclude=['tests']),
    scripts=[
        'scripts/bootdigest.py',
        'scripts/unpackslice.py',
    ],
    install_requires=[
        'bitstring',
    ],
    extras_require={
        'test': [
            'pytest',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: GPLv2 License",
        "Operating System :: OS Independent",
    ],
)
