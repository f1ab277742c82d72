"""Finds Oracle .NET driver assemblies in the GAC that are newer than the installed Oracle client."""
