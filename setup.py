from setuptools import setup, find_packages
setup(
    name='fintech-contract',
    version='0.1.0',
    package_dir={'': 'src'},
    packages=find_packages(where='src'),
    include_package_data=True,
    package_data={
        'fintech_contract': [
            'config/*.yaml',
        ],
    },
    description='API contract test client and suites for the fintech backend.',
    author='Your Name',
    author_email='youremail@example.com',
    install_requires=[
        'invoke>=2.0.0',
        'pyyaml>=6.0',
        'PyJWT>=2.0.0',
        'requests>=2.25.0',
        'pydantic>=2.0.0',
        'fastapi>=0.100.0',
        'httpx>=0.24.0',  # required by fastapi.testclient
    ],
    extras_require={
        'test': [
            'pytest>=7.0.0',
        ],
    },
    entry_points={
        'pytest11': [
            'fintech_contract = fintech_contract.pytest_plugin',
        ],
    },
)
