#! /usr/bin/python

from tarhash.cli import tarhash_tool

tarhash_tool()
