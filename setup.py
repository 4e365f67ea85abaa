# Packaging for the ionstat exporter. The runtime config shipped under
# ionstat/config is installed alongside the package and used when no
# --configfile or IONSTAT_CONFIG is provided.

from setuptools import setup

setup(
    name="ionstat",
    version="1.0.0",
    description="Prometheus exporter for ionic NIC hardware counters",
    license="MIT",
    python_requires=">=3.9",
    packages=["ionstat"],
    package_data={"ionstat": ["config/ionstat.default"]},
    install_requires=[
        "flask",
        "gunicorn",
        "prometheus_client>=0.17",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "ionstat-monitor=ionstat.node_monitoring:main",
        ],
    },
)
