from setuptools import setup

with open("README.md", 'r') as f:
    long_description = f.read()

setup(
    name='dfamin',
    version='1.0.0',
    description='Deterministic finite automaton minimizer',
    long_description=long_description,
    long_description_content_type='text/markdown',
    author='Paolo Bonzini',
    author_email='bonzini@gnu.org',
    packages=['dfamin', 'dfamin.cli'],
    python_requires='>=3.9',
    install_requires=[
        'compynator'
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'dfamin = dfamin.cli.main:main',
        ]
    }
)
