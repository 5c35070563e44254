from setuptools import setup, find_packages

VERSION = open("blogsite/VERSION").read().strip()

reqs = open("requirements.txt").read().strip().split("\n")

test_reqs = open("requirements-test.txt").read().strip().split("\n")

setup(
    name="blogsite",
    version=VERSION,
    packages=find_packages(exclude=["tests.*", "tests"]),
    include_package_data=True,
    package_data={"blogsite": ["py.typed", "VERSION"]},
    zip_safe=False,
    install_requires=reqs,
    extras_require={"tests": test_reqs},
    entry_points={
        "console_scripts": [
            "blogsite-build=blogsite.cli:build",
            "blogsite-config=blogsite.cli:config_cli",
        ]
    },
)
