import setuptools

setuptools.setup(
    name = 'splinepath',
    version = '1.0',
    description = 'arc-length parameterized paths of line and Bezier segments',
    packages = setuptools.find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.8',
    install_requires=['numpy', 'scipy>=1.0'],
    extras_require={'test': ['pytest']},
)
