from setuptools import find_packages, setup

exec(open("sigsafe/_version.py", encoding="utf-8").read())

with open("README.rst", encoding="utf8") as f:
    LONG_DESC = f.read()

setup(
    name="sigsafe",
    version=__version__,  # noqa: F821
    description="Run a callable with signals temporarily blocked, then restore the mask",
    long_description=LONG_DESC,
    long_description_content_type="text/x-rst",
    packages=find_packages(include=["sigsafe", "sigsafe.*"]),
    package_data={"sigsafe": ["py.typed"]},
    install_requires=[
        # attrs 22.2.0 adds the attrs namespace with define/frozen/field
        "attrs >= 22.2.0",
        # outcome 1.3.0 makes Outcome generic
        "outcome >= 1.3.0",
    ],
    extras_require={
        "test": ["pytest >= 7.0"],
    },
    python_requires=">=3.9",
    keywords=["signals", "sigprocmask", "pthread_sigmask", "posix"],
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Operating System :: POSIX :: Linux",
        "Operating System :: MacOS :: MacOS X",
        "Operating System :: POSIX :: BSD",
        "Programming Language :: Python :: Implementation :: CPython",
        "Programming Language :: Python :: Implementation :: PyPy",
        "Programming Language :: Python :: 3 :: Only",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: System :: Operating System",
        "Typing :: Typed",
    ],
)
