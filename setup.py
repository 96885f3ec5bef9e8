from setuptools import setup

setup(
    name='artifact-deckcode',
    version='0.2',
    description="Encoder/decoder for Artifact deck codes, with a card set loader to resolve the decoded ids",
    url='https://github.com/bernardpazio/artifact',
    author='Bernard Pazio',
    author_email='bernardpazio@gmail.com',
    packages=['artifact_deckcode'],
    python_requires='>=3.7',
    install_requires=['requests', 'beautifulsoup4'],
    extras_require={'test': ['pytest']}
)
