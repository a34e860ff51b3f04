import setuptools

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="nbtstruct",
    version="0.0.1",
    author="Gianluca Pacchiella",
    author_email="gp@ktln2.org",
    description="Named Binary Tag format for humans",
    long_description=long_description,
    long_description_content_type="text/markdown",
    url="https://github.com/gipi/nbtstruct",
    packages=setuptools.find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.8',
    install_requires=[],
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
