from setuptools import setup

version = open("./VERSION").read().strip()


README = open("./README.md").read()


setup(
    name="gw2",
    version=version,
    description="Two zone subcatchment groundwater simulation - Python",
    long_description=README,
    long_description_content_type="text/markdown",
    classifiers=[
        # Get strings from
        # http://pypi.python.org/pypi?%3Aaction=list_classifiers
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Intended Audience :: Developers",
        "Environment :: Console",
        "License :: OSI Approved :: GNU Lesser General Public License v2 (LGPLv2)",
        "Natural Language :: English",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Scientific/Engineering",
        "Topic :: Software Development :: Libraries :: Python Modules",
    ],
    keywords="hydrology groundwater aquifer swmm",
    author="RESPEC, Inc",
    author_email="",
    packages=["GW2", "GW2tools", "GW2IO"],
    include_package_data=True,
    zip_safe=False,
    install_requires=[
        "numpy",
        "pandas",
        "numba",
        "scipy",
        "pyparsing>=3.0",
        "tables",
        "cltoolbox",
    ],
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["gw2=GW2tools.GW2_CLI:main"]},
    python_requires=">=3.8",
)
