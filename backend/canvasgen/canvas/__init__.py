# Canvas module
# Boundary with the host canvas: conversion, insertion and queries
