from setuptools import setup, find_packages

__version__ = '0.1.0'

requirements = [
    'coloredlogs>=15.0',
    'pymongo>=4.0',
]

test_requirements = [
    'pytest',
]

setup(
    name='nftledger',
    version=__version__,
    description='Non-fungible token ledger with delegated transfer rights and per-owner enumeration.',
    packages=find_packages(include=['nftledger', 'nftledger.*']),
    install_requires=requirements,
    extras_require={
        'test': test_requirements,
    },
    python_requires='>=3.8',
    classifiers=[
        'Programming Language :: Python :: 3',
    ],
    zip_safe=True,
    include_package_data=True,
)
