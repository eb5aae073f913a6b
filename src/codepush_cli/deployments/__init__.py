"""CodePush deployments API and presentation helpers."""
