from setuptools import setup, find_packages

long_description = 'Update Homebrew formula version, release URLs and checksums'

setup(
    name='brewup',
    version='0.1.0',
    author='Interlynk',
    url='https://github.com/interlynk-io',
    description='Update Homebrew formula with new version and checksums',
    long_description=long_description,
    long_description_content_type="text/markdown",
    license='Apache-2.0',
    packages=find_packages(exclude=["tests", "tests.*"]),
    entry_points={
            'console_scripts': [
                'brewup = brewup.brewup:cli',
            ]
    },
    classifiers=(
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: MacOS",
        "Operating System :: POSIX :: Linux",
    ),
    keywords='brewup homebrew formula sha256 release',
    python_requires='>=3.9',
    install_requires=[
        "blessed",
    ],
    extras_require={
        "dev": [
            "pytest",
            "ruff",
        ],
    },
    zip_safe=False
)
