"""Readers and writers of Eclipse restart files."""
