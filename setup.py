"""
Packaging script for PyPI.
"""
import setuptools

setuptools.setup(
	name='tagged-variants',
	version='0.1.0',
	packages=['tagged', ],
	entry_points={
		'console_scripts': ["tagged = tagged.cmdline:main"],
	},
	license='MIT',
	description='Closed variant sets (tagged unions) with exhaustive dispatch, for Python',
	long_description=open('README.md').read(),
	long_description_content_type="text/markdown",
	classifiers=[
		"Programming Language :: Python :: 3.12",
		"License :: OSI Approved :: MIT License",
		"Operating System :: OS Independent",
		"Development Status :: 3 - Alpha",
		"Intended Audience :: Developers",
		"Intended Audience :: Education",
		"Topic :: Software Development :: Libraries",
		"Topic :: Education",
	],
	python_requires='>=3.11',
	install_requires=[
		"booze-tools>=0.6.2.1",
	],
)
