from setuptools import find_packages, setup


setup(
    name = 'foreman',
    description = 'Client for the Foreman REST API',
    license = 'MIT',
    packages = find_packages(exclude=['tests*']),
    install_requires = ['requests'],
    entry_points = {
        'console_scripts': ['foreman = foreman.cli:run'],
    },
)
