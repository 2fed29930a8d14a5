from setuptools import setup

setup(
    name="Panoscroll",
    version="0.1",
    description="Look around a web page panorama by tilting your phone",
    package_dir={"": "src"},
    packages=["panoscroll_py"],
    package_data={"panoscroll_py": ["client/*"]},
    python_requires=">=3.10",
    install_requires=[
        "flask",
        "platformdirs",
        "pyOpenSSL",
        "qrcode[pil]",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": ["panoscroll=panoscroll_py.app:main"],
    },
)
